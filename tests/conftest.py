"""Shared fixtures: synthetic hardware profiles and model descriptors."""

import pytest

from insightai.hardware.hardware_schema import CPU, GPUController, HardwareProfile, StorageDevice
from insightai.models.catalog import ModelDescriptor

GB = 1024 ** 3


def _make_profile(
    manufacturer="Intel",
    brand="Core i9-13900K",
    ram_gb=32,
    gpus=(),
    storage=(("NVMe", 512),),
    unavailable=(),
):
    """Build a HardwareProfile; gpus are (model, vram_mib) and storage (type, size_gb) pairs."""
    return HardwareProfile(
        cpu=CPU(manufacturer=manufacturer, brand=brand),
        total_ram_bytes=int(ram_gb * GB),
        gpu_controllers=[GPUController(model=model, vram_mib=vram) for model, vram in gpus],
        storage_devices=[StorageDevice(type=kind, size_bytes=size * GB) for kind, size in storage],
        unavailable=list(unavailable),
    )


def _make_model(
    id="test-model",
    name=None,
    family="",
    req_vram_gb=8,
    req_ram_gb=8,
    tags=("general",),
    quantization="Q4_K_M",
    size_params="7B",
):
    return ModelDescriptor(
        id=id,
        name=name or id,
        family=family,
        size_params=size_params,
        quantization=quantization,
        req_vram_gb=req_vram_gb,
        req_ram_gb=req_ram_gb,
        tags=frozenset(tags),
    )


@pytest.fixture
def make_profile():
    return _make_profile


@pytest.fixture
def make_model():
    return _make_model


@pytest.fixture
def apple_m3_32gb():
    return _make_profile(manufacturer="Apple", brand="M3", ram_gb=32, gpus=(("Apple M3 GPU", None),))


@pytest.fixture
def rtx_4090_desktop():
    return _make_profile(
        manufacturer="Intel",
        brand="Core i9",
        ram_gb=32,
        gpus=(("NVIDIA RTX 4090", 24 * 1024),),
    )


@pytest.fixture
def cpu_only_16gb():
    return _make_profile(manufacturer="Intel", brand="Core i5", ram_gb=16, gpus=(("Intel UHD Graphics 770", 128),))
