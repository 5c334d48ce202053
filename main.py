#!/usr/bin/env python3
"""
Scan Brawl

Main entry point: a thin wrapper around the argparse CLI in the scanbrawl
package, which holds:
- Character generation from product barcodes
- The in-memory collection
- Turn-based battle sessions and auto-simulation
- Settings management

To run: python main.py [scan|products|battle|simulate|play] ...
"""

from scanbrawl.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
