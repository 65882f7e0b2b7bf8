"""Allow ``python -m rofi_keys``."""

from rofi_keys.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
