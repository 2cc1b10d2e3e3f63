from .object_storage_port import ObjectStoragePort, StorageError, StoredObject

__all__ = ["ObjectStoragePort", "StorageError", "StoredObject"]
