#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
hardware_inspector.py

Collects the facts the recommendation engine needs about the host machine:
CPU vendor and brand, total RAM, graphics controllers with their VRAM, and
the physical storage devices.

Like the rest of the probe, this module never shells out to system tools
(nvidia-smi, lscpu, system_profiler) to scrape their text output. Everything
comes from Python libraries (py-cpuinfo, psutil, pynvml, amdsmi, wmi, pyobjc
IOKit bindings) or from stable OS filesystems such as /sys.

Each subsystem is read independently. A subsystem that cannot be read is
recorded in the "unavailable" list instead of aborting the whole scan, so the
engine can degrade its warnings rather than fail.
"""

import logging
import os
import platform
from typing import Any, Dict, List, Optional

from .hardware_schema import StorageType, Subsystem
from ..utils import load_iokit_functions, safe_import

logger = logging.getLogger(__name__)

# --- Constants ---
# cpuinfo vendor ids mapped to the manufacturer names used in profiles
CPU_VENDOR_NAMES = {
    "GenuineIntel": "Intel",
    "AuthenticAMD": "AMD",
    "AMDisbetter!": "AMD",
    "CentaurHauls": "VIA",
    "HygonGenuine": "Hygon",
}

# Block device prefixes that correspond to physical disks on Linux
LINUX_DISK_PREFIXES = ("sd", "nvme", "vd", "hd", "mmcblk")

# MSFT_PhysicalDisk enumerations
WMI_MEDIA_TYPE_HDD = 3
WMI_MEDIA_TYPES_SSD = (4, 5)
WMI_BUS_TYPE_NVME = 17

SECTOR_SIZE_BYTES = 512


def _normalize_vendor(vendor_id: Optional[str], brand: Optional[str]) -> Optional[str]:
    """Map a raw vendor id and brand string to a manufacturer name."""
    if brand and brand.strip().startswith("Apple"):
        return "Apple"
    if vendor_id:
        vendor_id = vendor_id.strip()
        return CPU_VENDOR_NAMES.get(vendor_id, vendor_id)
    if brand:
        lowered = brand.lower()
        if "intel" in lowered:
            return "Intel"
        if "amd" in lowered or "ryzen" in lowered:
            return "AMD"
        return brand.split()[0]
    return None


def _decode(value: Any) -> str:
    # Older pynvml releases return bytes, newer ones str
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


class HardwareInspector:
    """
    Inspects the host system and builds the raw data for a HardwareProfile.
    """

    def __init__(self, sysfs_root: str = "/sys"):
        """
        Initializes the HardwareInspector.

        Args:
            sysfs_root: Root of the sysfs tree read for Linux disk details
        """
        self.sysfs_root = sysfs_root
        self.platform = platform.system()
        self.hw_info: Dict[str, Any] = {
            "cpu": None,
            "total_ram_bytes": None,
            "gpu_controllers": [],
            "storage_devices": [],
            "unavailable": [],
        }

    def _mark_unavailable(self, subsystem: Subsystem, detail: str):
        logger.warning(f"Could not read {subsystem.value} details: {detail}")
        if subsystem.value not in self.hw_info["unavailable"]:
            self.hw_info["unavailable"].append(subsystem.value)

    def _get_cpu_details(self):
        """Reads the CPU vendor and brand using py-cpuinfo, falling back to platform."""
        brand = None
        vendor_id = None
        cpuinfo = safe_import("cpuinfo")
        if cpuinfo:
            try:
                info = cpuinfo.get_cpu_info()
                brand = info.get("brand_raw")
                vendor_id = info.get("vendor_id_raw")
            except Exception as e:
                logger.debug(f"py-cpuinfo failed, using platform fallback: {e}")

        if not brand:
            brand = platform.processor() or None

        manufacturer = _normalize_vendor(vendor_id, brand)
        if not manufacturer:
            self._mark_unavailable(Subsystem.CPU, "no vendor or brand string reported")
            return

        self.hw_info["cpu"] = {"manufacturer": manufacturer, "brand": (brand or "").strip()}

    def _get_ram_details(self):
        """Reads total physical memory using psutil."""
        psutil = safe_import("psutil")
        if not psutil:
            self._mark_unavailable(Subsystem.MEMORY, "psutil is not installed")
            return
        try:
            self.hw_info["total_ram_bytes"] = int(psutil.virtual_memory().total)
        except Exception as e:
            self._mark_unavailable(Subsystem.MEMORY, str(e))

    def _get_nvidia_gpus(self) -> List[Dict[str, Any]]:
        """Reads NVIDIA GPUs and their VRAM using pynvml."""
        controllers = []
        pynvml = safe_import("pynvml")
        if not pynvml:
            return controllers
        try:
            pynvml.nvmlInit()
        except pynvml.NVMLError:
            # No NVIDIA driver: simply no NVIDIA GPUs on this machine
            return controllers
        try:
            for i in range(pynvml.nvmlDeviceGetCount()):
                handle = pynvml.nvmlDeviceGetHandleByIndex(i)
                name = _decode(pynvml.nvmlDeviceGetName(handle))
                if "nvidia" not in name.lower():
                    name = f"NVIDIA {name}"
                vram_mib = None
                try:
                    vram_mib = pynvml.nvmlDeviceGetMemoryInfo(handle).total / (1024 ** 2)
                except pynvml.NVMLError as e:
                    logger.warning(f"VRAM unreadable for {name}: {e}")
                controllers.append({"model": name, "vram_mib": vram_mib})
        finally:
            pynvml.nvmlShutdown()
        return controllers

    def _get_amd_gpus(self) -> List[Dict[str, Any]]:
        """Reads AMD GPUs and their VRAM using amdsmi."""
        controllers = []
        # No AMD GPUs on Apple Silicon and amdsmi does not run on macOS
        if self.platform == "Darwin":
            return controllers
        amdsmi = safe_import("amdsmi")
        if not amdsmi:
            return controllers
        try:
            amdsmi.amdsmi_init()
        except amdsmi.AmdSmiException:
            # No ROCm driver: no AMD GPUs visible to amdsmi
            return controllers
        try:
            for handle in amdsmi.amdsmi_get_processor_handles():
                try:
                    name = _decode(amdsmi.amdsmi_get_gpu_product_name(handle))
                except amdsmi.AmdSmiException as e:
                    logger.debug(f"Skipping AMD device without a product name: {e}")
                    continue
                vram_mib = None
                try:
                    vram_info = amdsmi.amdsmi_get_gpu_vram_info(handle)
                    if vram_info and vram_info.get("vram_total"):
                        vram_mib = vram_info["vram_total"] / (1024 ** 2)
                except amdsmi.AmdSmiException as e:
                    logger.warning(f"VRAM unreadable for {name}: {e}")
                controllers.append({"model": name, "vram_mib": vram_mib})
        finally:
            amdsmi.amdsmi_shut_down()
        return controllers

    def _get_windows_video_controllers(self, known: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Lists the remaining display adapters (Intel, AMD, ...) through WMI."""
        controllers = []
        if self.platform != "Windows":
            return controllers
        wmi = safe_import("wmi")
        if not wmi:
            return controllers

        known_names = {c["model"].lower() for c in known}
        nvml_found = any("nvidia" in name for name in known_names)
        try:
            adapters = wmi.WMI().Win32_VideoController()
        except Exception as e:
            # Controllers already read through NVML/amdsmi stay valid
            logger.warning(f"WMI video controller query failed: {e}")
            return controllers

        for adapter in adapters:
            name = (adapter.Name or "").strip()
            if not name or name.lower() in known_names:
                continue
            if nvml_found and "nvidia" in name.lower():
                continue
            known_names.add(name.lower())
            # AdapterRAM is a 32-bit field that tops out at 4GB, so VRAM stays unknown
            controllers.append({"model": name, "vram_mib": None})
        return controllers

    def _get_apple_gpu(self) -> List[Dict[str, Any]]:
        """Apple Silicon GPUs share system memory, so their VRAM is unknown by definition."""
        cpu = self.hw_info["cpu"]
        if not cpu or cpu["manufacturer"] != "Apple":
            return []
        chip = cpu["brand"] if cpu["brand"].startswith("Apple") else f"Apple {cpu['brand']}".strip()
        return [{"model": f"{chip} GPU", "vram_mib": None}]

    def _get_gpu_details(self):
        """Gathers graphics controllers across vendors."""
        try:
            controllers = self._get_nvidia_gpus()
            controllers.extend(self._get_amd_gpus())
            controllers.extend(self._get_windows_video_controllers(controllers))
            controllers.extend(self._get_apple_gpu())
        except Exception as e:
            self._mark_unavailable(Subsystem.GRAPHICS, str(e))
            return
        self.hw_info["gpu_controllers"] = controllers

    def _get_linux_storage(self) -> List[Dict[str, Any]]:
        devices = []
        block_root = os.path.join(self.sysfs_root, "block")
        for device in sorted(os.listdir(block_root)):
            if not device.startswith(LINUX_DISK_PREFIXES):
                continue
            rotational_path = os.path.join(block_root, device, "queue", "rotational")
            if not os.path.exists(rotational_path):
                continue
            with open(rotational_path, "r") as f:
                # '0' is non-rotational (SSD/NVMe), '1' is rotational (HDD)
                rotational = f.read().strip() == "1"
            if rotational:
                storage_type = StorageType.HDD
            elif device.startswith("nvme"):
                storage_type = StorageType.NVME
            else:
                storage_type = StorageType.SSD

            size_bytes = 0
            size_path = os.path.join(block_root, device, "size")
            if os.path.exists(size_path):
                with open(size_path, "r") as f:
                    size_bytes = int(f.read().strip() or 0) * SECTOR_SIZE_BYTES
            devices.append({"type": storage_type.value, "size_bytes": size_bytes})
        return devices

    def _get_windows_storage(self) -> List[Dict[str, Any]]:
        devices = []
        wmi = safe_import("wmi")
        if not wmi:
            return devices
        c = wmi.WMI(namespace="root/Microsoft/Windows/Storage")
        for disk in c.MSFT_PhysicalDisk():
            if disk.BusType == WMI_BUS_TYPE_NVME:
                storage_type = StorageType.NVME
            elif disk.MediaType in WMI_MEDIA_TYPES_SSD:
                storage_type = StorageType.SSD
            elif disk.MediaType == WMI_MEDIA_TYPE_HDD:
                storage_type = StorageType.HDD
            else:
                storage_type = StorageType.OTHER
            devices.append({"type": storage_type.value, "size_bytes": int(disk.Size or 0)})
        return devices

    def _get_iokit_storage_type(self) -> Optional[StorageType]:
        """Reads the medium of the first typed block storage device from IOKit."""
        iokit = load_iokit_functions()
        if not iokit:
            logger.debug("IOKit bindings not available, storage medium unknown")
            return None
        IOServiceMatching, IOServiceGetMatchingServices, IOIteratorNext, IOObjectRelease, IORegistryEntryCreateCFProperties = iokit

        storage_type = None
        _, iterator = IOServiceGetMatchingServices(0, IOServiceMatching(b"IOBlockStorageDevice"), None)  # 0 for kIOMasterPortDefault
        if not iterator:
            return None
        try:
            while storage_type is None:
                drive = IOIteratorNext(iterator)
                if not drive:
                    break
                try:
                    _, properties = IORegistryEntryCreateCFProperties(drive, None, None, 0)
                finally:
                    IOObjectRelease(drive)
                if not properties:
                    continue
                medium = (properties.get("Device Characteristics") or {}).get("Medium Type")
                if medium == "Solid State" or properties.get("Solid State"):
                    storage_type = StorageType.SSD
                elif medium == "Rotational" or properties.get("Drive Type") == "Rotational":
                    storage_type = StorageType.HDD
        finally:
            IOObjectRelease(iterator)
        return storage_type

    def _get_macos_storage(self) -> List[Dict[str, Any]]:
        psutil = safe_import("psutil")
        size_bytes = psutil.disk_usage("/").total if psutil else 0

        # Every Apple Silicon Mac boots from an internal NVMe SSD
        cpu = self.hw_info["cpu"]
        if cpu and cpu["manufacturer"] == "Apple":
            return [{"type": StorageType.NVME.value, "size_bytes": size_bytes}]

        # Intel Macs shipped with SSDs, Fusion Drives or HDDs: ask IOKit
        storage_type = self._get_iokit_storage_type()
        if storage_type is None:
            return []
        return [{"type": storage_type.value, "size_bytes": size_bytes}]

    def _get_storage_details(self):
        """Determines the type and size of each physical storage device."""
        try:
            if self.platform == "Linux":
                devices = self._get_linux_storage()
            elif self.platform == "Windows":
                devices = self._get_windows_storage()
            elif self.platform == "Darwin":
                devices = self._get_macos_storage()
            else:
                devices = []
        except Exception as e:
            self._mark_unavailable(Subsystem.DISK, str(e))
            return

        if not devices:
            self._mark_unavailable(Subsystem.DISK, f"no storage devices found on {self.platform}")
            return
        self.hw_info["storage_devices"] = devices

    def inspect_all(self) -> Dict[str, Any]:
        """Runs all inspection methods to build the raw hardware profile."""
        # CPU first: Apple GPU and storage detection depend on the vendor
        self._get_cpu_details()
        self._get_ram_details()
        self._get_gpu_details()
        self._get_storage_details()
        return self.hw_info
