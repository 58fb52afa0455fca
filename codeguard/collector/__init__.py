from .file_collector import (
    CollectedFile,
    CollectionResult,
    CollectOptions,
    collect_files,
)

__all__ = ["CollectedFile", "CollectionResult", "CollectOptions", "collect_files"]
