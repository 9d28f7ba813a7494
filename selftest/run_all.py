"""Run all selftests.

Usage:
  python -m selftest.run_all
"""

import importlib


TEST_MODULES = [
    'selftest.test_param_store',
    'selftest.test_particles_integrator',
    'selftest.test_flow_field',
    'selftest.test_echoes',
    'selftest.test_raster_surface',
    'selftest.test_qt_surface',
    'selftest.test_frame_driver',
    'selftest.test_sketches',
    'selftest.test_app_shell',
    'selftest.runner',
]


def main():
    failures = []
    for modname in TEST_MODULES:
        try:
            m = importlib.import_module(modname)
            # If module provides main(), call it; else do nothing.
            if hasattr(m, "main") and callable(getattr(m, "main")):
                m.main()
        except Exception as e:
            failures.append((modname, e))

    if failures:
        print("\nFAILED:")
        for modname, e in failures:
            print(f"- {modname}: {e!r}")
        raise SystemExit(1)

    print("\nOK: all selftests passed")


if __name__ == "__main__":
    main()
