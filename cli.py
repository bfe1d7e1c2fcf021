#!/usr/bin/env python3
"""
SOAP Client CLI - Точка входа
"""

from soap_session.cli_interface import run_cli

if __name__ == "__main__":
    raise SystemExit(run_cli())
