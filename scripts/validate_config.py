#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sigscan_app.config.loader import ConfigLoader
from sigscan_app.config.validation import ConfigValidator, ValidationError


def validate_symbol_config(loader: ConfigLoader, symbol: str) -> List[ValidationError]:
    """Validate merged configuration for a specific symbol."""
    config = loader.merge_config(symbol)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    print("Validating sigscan configuration...")

    loader = ConfigLoader.create()
    symbols = list(loader.load().scanner.symbols) + ["UNKNOWN:SYMBOL"]

    all_valid = True

    for symbol in symbols:
        try:
            errors = validate_symbol_config(loader, symbol)
        except Exception as e:
            print(f"  {symbol}: cannot load configuration: {e}")
            all_valid = False
            continue

        if errors:
            print(f"  {symbol}: {len(errors)} validation errors")
            for error in errors:
                print(f"    - {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print(f"  {symbol}: ok")

    if all_valid:
        print("All configuration validation passed")
        sys.exit(0)
    else:
        print("Configuration validation failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
