"""In-memory kitties runtime with a compact binary codec and storage-backed linked lists."""

__version__ = "0.1.0"
__all__ = ["codec", "linked_item", "kitty", "frame", "template", "kitties", "runtime"]