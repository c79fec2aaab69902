import importlib
from types import SimpleNamespace

import pytest

from insightai.engine.recommender import summarize_specs
from insightai.exceptions import ProbeError
from insightai.hardware import hardware_inspector
from insightai.hardware.hardware_inspector import HardwareInspector
from insightai.hardware.hardware_schema import HardwareProfile, StorageType, Subsystem

system_info_module = importlib.import_module("insightai.hardware.system_info")

GB = 1024 ** 3


class FakeNVMLError(Exception):
    pass


def _fake_pynvml(gpus, init_error=False):
    def init():
        if init_error:
            raise FakeNVMLError("driver not loaded")

    return SimpleNamespace(
        NVMLError=FakeNVMLError,
        nvmlInit=init,
        nvmlShutdown=lambda: None,
        nvmlDeviceGetCount=lambda: len(gpus),
        nvmlDeviceGetHandleByIndex=lambda i: i,
        nvmlDeviceGetName=lambda h: gpus[h][0],
        nvmlDeviceGetMemoryInfo=lambda h: SimpleNamespace(total=gpus[h][1]),
    )


def _fake_cpuinfo(brand, vendor=""):
    return SimpleNamespace(get_cpu_info=lambda: {"brand_raw": brand, "vendor_id_raw": vendor})


def _fake_psutil(total_gb):
    return SimpleNamespace(
        virtual_memory=lambda: SimpleNamespace(total=total_gb * GB),
        disk_usage=lambda path: SimpleNamespace(total=512 * GB),
    )


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


@pytest.fixture
def sysfs(tmp_path):
    block = tmp_path / "block"
    _write(block / "nvme0n1" / "queue" / "rotational", "0\n")
    _write(block / "nvme0n1" / "size", str(1000 * GB // 512))
    _write(block / "sda" / "queue" / "rotational", "1\n")
    _write(block / "sda" / "size", str(2000 * GB // 512))
    _write(block / "loop0" / "queue" / "rotational", "0\n")
    return tmp_path


def _inspector(monkeypatch, modules, platform_name="Linux", sysfs_root="/nonexistent"):
    monkeypatch.setattr(hardware_inspector, "safe_import", lambda name: modules.get(name))
    inspector = HardwareInspector(sysfs_root=str(sysfs_root))
    inspector.platform = platform_name
    return inspector


def test_linux_workstation_with_nvidia(monkeypatch, sysfs):
    modules = {
        "cpuinfo": _fake_cpuinfo("Intel(R) Core(TM) i9-13900K", "GenuineIntel"),
        "psutil": _fake_psutil(64),
        "pynvml": _fake_pynvml([(b"NVIDIA GeForce RTX 4090", 24 * GB)]),
    }
    data = _inspector(monkeypatch, modules, sysfs_root=sysfs).inspect_all()
    profile = HardwareProfile(**data)

    assert profile.cpu.manufacturer == "Intel"
    assert profile.total_ram_gb == 64
    assert profile.gpu_controllers[0].model == "NVIDIA GeForce RTX 4090"
    assert profile.total_vram_gb == 24
    assert [d.type for d in profile.storage_devices] == [StorageType.NVME, StorageType.HDD]
    assert profile.storage_devices[0].size_bytes == 1000 * GB
    assert profile.unavailable == []


def test_nvml_name_without_vendor_prefix(monkeypatch, sysfs):
    modules = {
        "cpuinfo": _fake_cpuinfo("AMD Ryzen 9 7950X", "AuthenticAMD"),
        "psutil": _fake_psutil(32),
        "pynvml": _fake_pynvml([("Tesla T4", 16 * GB)]),
    }
    data = _inspector(monkeypatch, modules, sysfs_root=sysfs).inspect_all()
    assert data["cpu"]["manufacturer"] == "AMD"
    assert data["gpu_controllers"][0]["model"] == "NVIDIA Tesla T4"


def test_no_nvidia_driver_is_not_a_failure(monkeypatch, sysfs):
    modules = {
        "cpuinfo": _fake_cpuinfo("Intel(R) Core(TM) i5", "GenuineIntel"),
        "psutil": _fake_psutil(16),
        "pynvml": _fake_pynvml([], init_error=True),
    }
    data = _inspector(monkeypatch, modules, sysfs_root=sysfs).inspect_all()
    assert data["gpu_controllers"] == []
    assert "graphics" not in data["unavailable"]


def test_apple_silicon_mac(monkeypatch):
    modules = {"cpuinfo": _fake_cpuinfo("Apple M3 Pro"), "psutil": _fake_psutil(36)}
    data = _inspector(monkeypatch, modules, platform_name="Darwin").inspect_all()
    profile = HardwareProfile(**data)

    assert profile.is_apple_silicon
    assert profile.cpu.display_name == "Apple M3 Pro"
    assert profile.gpu_controllers[0].model == "Apple M3 Pro GPU"
    assert profile.gpu_controllers[0].vram_mib is None
    assert profile.storage_devices[0].type == StorageType.NVME


def test_partial_failures_are_recorded(monkeypatch):
    monkeypatch.setattr(hardware_inspector.platform, "processor", lambda: "")
    data = _inspector(monkeypatch, {}, platform_name="Linux").inspect_all()
    assert data["cpu"] is None
    assert data["total_ram_bytes"] is None
    assert data["unavailable"] == ["cpu", "memory", "disk"]


def test_system_info_raises_for_mandatory_subsystems(monkeypatch):
    class BrokenInspector:
        def inspect_all(self):
            return {"cpu": None, "total_ram_bytes": 8 * GB, "unavailable": ["cpu"]}

    monkeypatch.setattr(system_info_module, "HardwareInspector", BrokenInspector)
    with pytest.raises(ProbeError) as excinfo:
        system_info_module.system_info()
    assert excinfo.value.subsystems == ["cpu"]


def test_system_info_tolerates_optional_subsystems(monkeypatch):
    class PartialInspector:
        def inspect_all(self):
            return {
                "cpu": {"manufacturer": "Intel", "brand": "Core i7"},
                "total_ram_bytes": 16 * GB,
                "unavailable": ["graphics", "disk"],
            }

    monkeypatch.setattr(system_info_module, "HardwareInspector", PartialInspector)
    profile = system_info_module.system_info()
    assert profile.unavailable == [Subsystem.GRAPHICS, Subsystem.DISK]


class FakeAmdSmiException(Exception):
    pass


def _fake_amdsmi(gpus):
    def product_name(handle):
        name = gpus[handle][0]
        if name is None:
            raise FakeAmdSmiException("product name not supported")
        return name

    return SimpleNamespace(
        AmdSmiException=FakeAmdSmiException,
        amdsmi_init=lambda: None,
        amdsmi_shut_down=lambda: None,
        amdsmi_get_processor_handles=lambda: list(range(len(gpus))),
        amdsmi_get_gpu_product_name=product_name,
        amdsmi_get_gpu_vram_info=lambda h: {"vram_total": gpus[h][1], "vram_used": 0},
    )


def _fake_wmi(adapters, disks):
    connection = SimpleNamespace(
        Win32_VideoController=lambda: [SimpleNamespace(Name=name) for name in adapters],
        MSFT_PhysicalDisk=lambda: [SimpleNamespace(BusType=bus, MediaType=media, Size=size) for bus, media, size in disks],
    )
    return SimpleNamespace(WMI=lambda **kwargs: connection)


def test_amd_gpus_are_listed(monkeypatch, sysfs):
    modules = {
        "cpuinfo": _fake_cpuinfo("AMD Ryzen 9 7950X", "AuthenticAMD"),
        "psutil": _fake_psutil(64),
        "amdsmi": _fake_amdsmi([("AMD Radeon RX 7900 XTX", 24 * GB), (None, 0)]),
    }
    data = _inspector(monkeypatch, modules, sysfs_root=sysfs).inspect_all()
    assert data["gpu_controllers"] == [{"model": "AMD Radeon RX 7900 XTX", "vram_mib": 24576}]

    profile = HardwareProfile(**data)
    assert not profile.has_nvidia
    assert summarize_specs(profile).gpu == "AMD Radeon RX 7900 XTX"


def test_windows_adapters_complement_nvml(monkeypatch):
    modules = {
        "cpuinfo": _fake_cpuinfo("Intel(R) Core(TM) i7-13700K", "GenuineIntel"),
        "psutil": _fake_psutil(32),
        "pynvml": _fake_pynvml([("NVIDIA GeForce RTX 4070", 12 * GB)]),
        "wmi": _fake_wmi(
            ["NVIDIA GeForce RTX 4070", "Intel(R) UHD Graphics 770", ""],
            [(17, 4, 1000 * GB), (11, 3, 2000 * GB)],
        ),
    }
    data = _inspector(monkeypatch, modules, platform_name="Windows").inspect_all()
    profile = HardwareProfile(**data)

    assert [gpu.model for gpu in profile.gpu_controllers] == ["NVIDIA GeForce RTX 4070", "Intel(R) UHD Graphics 770"]
    assert profile.gpu_controllers[1].vram_mib is None
    assert profile.total_vram_gb == 12
    assert [d.type for d in profile.storage_devices] == [StorageType.NVME, StorageType.HDD]


def test_windows_adapters_without_nvml(monkeypatch):
    modules = {
        "cpuinfo": _fake_cpuinfo("AMD Ryzen 5 5600X", "AuthenticAMD"),
        "psutil": _fake_psutil(16),
        "wmi": _fake_wmi(["NVIDIA GeForce GTX 1660"], [(11, 4, 500 * GB)]),
    }
    data = _inspector(monkeypatch, modules, platform_name="Windows").inspect_all()
    # Listed by name only; its VRAM stays unknown
    assert data["gpu_controllers"] == [{"model": "NVIDIA GeForce GTX 1660", "vram_mib": None}]


def _fake_iokit(drives):
    pending = iter(drives)
    released = []
    functions = (
        lambda name: name,
        lambda port, matching, existing: (0, "iterator"),
        lambda iterator: next(pending, None),
        released.append,
        lambda drive, allocator, options, flags: (0, drives[drive]),
    )
    return functions, released


def test_intel_mac_reads_storage_medium_from_iokit(monkeypatch):
    drives = {
        "disk0": {"Device Characteristics": {"Product Name": "APPLE HDD"}},
        "disk1": {"Device Characteristics": {"Medium Type": "Rotational"}},
    }
    functions, released = _fake_iokit(drives)
    monkeypatch.setattr(hardware_inspector, "load_iokit_functions", lambda: functions)

    modules = {"cpuinfo": _fake_cpuinfo("Intel(R) Core(TM) i7-9750H", "GenuineIntel"), "psutil": _fake_psutil(16)}
    data = _inspector(monkeypatch, modules, platform_name="Darwin").inspect_all()

    assert data["storage_devices"] == [{"type": "HDD", "size_bytes": 512 * GB}]
    assert data["gpu_controllers"] == []
    assert set(released) == {"disk0", "disk1", "iterator"}


def test_intel_mac_solid_state(monkeypatch):
    functions, _ = _fake_iokit({"disk0": {"Device Characteristics": {"Medium Type": "Solid State"}}})
    monkeypatch.setattr(hardware_inspector, "load_iokit_functions", lambda: functions)

    modules = {"cpuinfo": _fake_cpuinfo("Intel(R) Core(TM) i9-9980HK", "GenuineIntel"), "psutil": _fake_psutil(32)}
    profile = HardwareProfile(**_inspector(monkeypatch, modules, platform_name="Darwin").inspect_all())
    assert profile.has_ssd
    assert summarize_specs(profile).storage == "512GB SSD"


def test_intel_mac_without_iokit_marks_disk_unavailable(monkeypatch):
    monkeypatch.setattr(hardware_inspector, "load_iokit_functions", lambda: None)
    modules = {"cpuinfo": _fake_cpuinfo("Intel(R) Core(TM) i5-8259U", "GenuineIntel"), "psutil": _fake_psutil(8)}
    data = _inspector(monkeypatch, modules, platform_name="Darwin").inspect_all()
    assert data["storage_devices"] == []
    assert data["unavailable"] == ["disk"]
