import sys
import os
import argparse
import importlib


# Fail loudly and helpfully if required Python packages are missing.
def _require_modules(mods):
    missing = []
    for m in mods:
        try:
            importlib.import_module(m)
        except ImportError:
            missing.append(m)
    if missing:
        print("\nERROR: Missing required Python package(s): {}".format(', '.join(missing)))
        print("Install them with:")
        print("  python -m pip install -e .")
        sys.exit(1)


_require_modules(['flask', 'numpy'])

# Allow running from project root without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from NTE.server import create_app, DEFAULT_DATA_DIR


def main(argv=None):
    parser = argparse.ArgumentParser(description="Neural telemetry dashboard API")
    parser.add_argument("--data-dir", default=DEFAULT_DATA_DIR,
                        help="directory holding time_sliced_data.txt and friends")
    parser.add_argument("--config-root", default=None,
                        help="only directory configuration may be read/written (default: data dir)")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    args = parser.parse_args(argv)

    app = create_app(data_dir=args.data_dir, config_root=args.config_root)
    print(f"Data dir    : {app.config['NTE_DATA_DIR']}")
    print(f"Config root : {app.config['NTE_CONFIG_ROOT']}")
    app.run(host=args.host, port=args.port)


if __name__ == '__main__':
    # Run on localhost:5000 by default
    main()
