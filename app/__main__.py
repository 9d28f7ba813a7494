# Qt entry for `python -m app`
from sketchbook import main

if __name__ == "__main__":
    raise SystemExit(main())
