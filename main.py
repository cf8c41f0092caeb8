#!/usr/bin/env python3
"""
Simple Test Framework - Self-Test Entry Point

Registers the framework's own test programs and runs them in
registration order, exiting with the harness status code.
"""

import selftest  # noqa: F401
import stf

if __name__ == "__main__":
    stf.main()
