from .storage_config import StorageConfig, build_storage_adapter, load_storage_config

__all__ = ["StorageConfig", "build_storage_adapter", "load_storage_config"]
