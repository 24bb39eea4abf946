"""
Demo: build the optimal BST for a small key/frequency list and print it

How to run:
  python demo.py
  python demo.py --keys 10,20,30,40,50 --freqs 4,2,6,3,1
"""

from __future__ import annotations

import argparse
from typing import List

import obst
from tree_printer import print_tree


def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]


def parse_keys(items: List[str]) -> list:
    # Integer keys are compared as numbers, anything else as strings
    try:
        return [int(x) for x in items]
    except ValueError:
        return items


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Build and print an optimal binary search tree")
    ap.add_argument("--keys", type=str, default="a,b,c,d",
                    help="Comma-separated keys, already in ascending order")
    ap.add_argument("--freqs", type=str, default="0.8,0.1,0.6,0.5",
                    help="Comma-separated access frequencies, one per key")
    args = ap.parse_args(argv)

    keys = parse_keys(parse_csv_list(args.keys))
    try:
        freqs = [float(x) for x in parse_csv_list(args.freqs)]
    except ValueError as e:
        ap.error(f"--freqs must be numbers: {e}")

    try:
        root = obst.construct(freqs, keys)
    except obst.InvalidInputError as e:
        ap.error(str(e))

    print_tree(root)
    print(f"Total weighted search cost: {obst.weighted_cost(root):.4f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
