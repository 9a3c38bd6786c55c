"""Hash utilities for Wise."""

import hashlib

OBJECT_KINDS = ('blob', 'tree', 'commit')


def object_header(kind: str, size: int) -> bytes:
    """
    Build the object header.
    
    Format: <kind> <size>\\0
    
    Args:
        kind: Object kind ('blob', 'tree' or 'commit')
        size: Payload length in bytes
        
    Returns:
        bytes: Encoded header
    """
    return f"{kind} {size}\0".encode()


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def object_id(kind: str, payload: bytes) -> str:
    """
    Compute the identifier of an object.
    
    The identifier covers the header plus the uncompressed payload,
    never the compressed bytes written to disk.
    
    Args:
        kind: Object kind
        payload: Raw object payload
        
    Returns:
        40-character hex string
    """
    return hash_object(object_header(kind, len(payload)) + payload)


def is_object_id(value: str) -> bool:
    """Check that value is a 40-character lowercase hex id."""
    return (
        isinstance(value, str)
        and len(value) == 40
        and all(c in '0123456789abcdef' for c in value)
    )
