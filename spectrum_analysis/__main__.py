# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

from .cli import main

if __name__ == "__main__":
    main()
