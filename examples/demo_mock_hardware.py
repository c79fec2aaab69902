#!/usr/bin/env python3
"""
Demo: recommendations for hand-built hardware profiles, no probing needed
"""

from insightai import UserDeclaration, create_hardware_profile, default_catalog, recommend

GB = 1024 ** 3

MACHINES = {
    "MacBook Pro M3 Max 64GB": create_hardware_profile(
        cpu={"manufacturer": "Apple", "brand": "Apple M3 Max"},
        total_ram_bytes=64 * GB,
        gpu_controllers=[{"model": "Apple M3 Max GPU", "vram_mib": None}],
        storage_devices=[{"type": "NVMe", "size_bytes": 1024 * GB}],
    ),
    "Gaming laptop RTX 4060 16GB": create_hardware_profile(
        cpu={"manufacturer": "Intel", "brand": "Core i7-13700H"},
        total_ram_bytes=16 * GB,
        gpu_controllers=[{"model": "NVIDIA GeForce RTX 4060 Laptop GPU", "vram_mib": 8192}],
        storage_devices=[{"type": "SSD", "size_bytes": 512 * GB}],
    ),
    "Office desktop 8GB": create_hardware_profile(
        cpu={"manufacturer": "Intel", "brand": "Core i3-10100"},
        total_ram_bytes=8 * GB,
        gpu_controllers=[{"model": "Intel UHD Graphics 630", "vram_mib": 128}],
        storage_devices=[{"type": "HDD", "size_bytes": 1000 * GB}],
    ),
}


def main():
    catalog = default_catalog()
    for label, profile in MACHINES.items():
        form_factor = "desktop" if "desktop" in label.lower() else "laptop"
        result = recommend(profile, UserDeclaration(form_factor=form_factor, intent="chat"), catalog)
        print(f"\n{label}: {result.rank.value} ({result.score})")
        print(f"  best: {', '.join(e.model.name for e in result.tiers.best) or '-'}")
        print(f"  good: {', '.join(e.model.name for e in result.tiers.good) or '-'}")
        print(f"  bad:  {', '.join(e.model.name for e in result.tiers.bad) or '-'}")
        for warning in result.warnings:
            print(f"  ! {warning}")


if __name__ == "__main__":
    main()
