"""Preview package.

Frame driver, simulation clock and the headless runner. Nothing in here
imports Qt; the interactive window lives in `qt`.
"""
