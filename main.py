"""Run the palette page locally.

Usage
-----
$ pip install -e .
$ python main.py            # starts on http://127.0.0.1:5000

Settings can be overridden with PALETTE_RAMP_* environment variables,
e.g. PALETTE_RAMP_DEFAULT_COLOR='"#3366cc"' or PALETTE_RAMP_DEFAULT_COUNT=8.
"""

from palette_ramp.app import create_app

if __name__ == "__main__":
    create_app().run(debug=False, threaded=True)
