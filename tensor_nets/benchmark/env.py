import platform
import psutil
import importlib.metadata
from typing import Dict, Any, List

import torch


class EnvironmentSniffer:
    @staticmethod
    def get_hardware_name() -> str:
        if torch.cuda.is_available():
            return torch.cuda.get_device_name(0)
        return platform.processor() or "Unknown CPU"

    @staticmethod
    def get_memory_bytes() -> int:
        return psutil.virtual_memory().total

    @staticmethod
    def get_platform_info() -> Dict[str, Any]:
        return {
            "os": platform.system(),
            "os_release": platform.release(),
            "machine": platform.machine(),
            "python_version": platform.python_version(),
            "cpu_count": psutil.cpu_count(logical=True),
        }

    @staticmethod
    def get_libs_info() -> Dict[str, Any]:
        libs = {}
        for lib in ["numpy", "torch", "tensor_nets"]:
            try:
                libs[lib] = importlib.metadata.version(lib)
            except importlib.metadata.PackageNotFoundError:
                libs[lib] = "not_installed"
        return libs

    @classmethod
    def sniff(cls) -> Dict[str, Any]:
        return {
            "hardware_name": cls.get_hardware_name(),
            "memory_bytes": cls.get_memory_bytes(),
            "platform_info": cls.get_platform_info(),
            "libs_info": cls.get_libs_info(),
        }

    @classmethod
    def describe(cls) -> List[str]:
        info = cls.sniff()
        plat = info["platform_info"]
        libs = ", ".join(f"{k}={v}" for k, v in info["libs_info"].items())
        return [
            f"Hardware: {info['hardware_name']} "
            f"({info['memory_bytes'] / 1024**3:.1f} GiB RAM, {plat['cpu_count']} CPUs)",
            f"Platform: {plat['os']} {plat['os_release']} {plat['machine']}, "
            f"Python {plat['python_version']}",
            f"Libraries: {libs}",
        ]
