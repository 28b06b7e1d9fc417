# src/chunk_kit/chunking/props.py

"""Keys of the untyped per-chunk property bag.

Consumers that only see key/value metadata (vector store payloads, JSON
exports) read hierarchy information through these keys instead of the typed
chunk fields.
"""

# Hierarchy
HIERARCHY_LEVEL = "hierarchy.level"
HIERARCHY_CHUNK_TYPE = "hierarchy.chunkType"
MERGE_GROUP_ID = "hierarchy.mergeGroupId"
CHILD_CHUNK_IDS = "hierarchy.childChunkIds"

# Navigation
PARENT_CHUNK_ID = "nav.parentChunkId"
