#!/usr/bin/env python3
"""
Demo: probe this machine and print model recommendations
"""

import logging
import sys

from insightai import analyze, UserDeclaration

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


def main():
    form_factor = sys.argv[1] if len(sys.argv) > 1 else "laptop"
    intent = sys.argv[2] if len(sys.argv) > 2 else "chat"

    declaration = UserDeclaration(form_factor=form_factor, intent=intent)
    result = analyze(declaration)

    print(f"\n=== System ===")
    print(f"CPU: {result.specs.cpu}")
    print(f"RAM: {result.specs.ram}")
    print(f"GPU: {result.specs.gpu} ({result.specs.vram})")
    print(f"Storage: {result.specs.storage}")
    print(f"Rank: {result.rank.value} (score {result.score}, {result.architecture})")

    if result.warnings:
        print(f"\n=== Warnings ===")
        for warning in result.warnings:
            print(f"  - {warning}")

    for tier in ("best", "good", "bad"):
        entries = getattr(result.tiers, tier)
        print(f"\n=== {tier.upper()} ({len(entries)}) ===")
        for entry in entries:
            print(f"  {entry.model.name} [{entry.model.quantization}]")
            print(f"    {entry.fit_reason}")


if __name__ == "__main__":
    main()
