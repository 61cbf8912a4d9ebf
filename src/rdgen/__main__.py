import sys

from rdgen.cli.rdgen import main

if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
