"""Base model class and canonbridge-specific Pydantic configuration.

Canonical values travel through pydantic as raw ``bytes``. Pydantic's default
JSON handling of bytes is UTF-8, which cannot carry arbitrary binary data, so
this module fixes a configuration where bytes are base64 in JSON.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# Framework-level settings for anything holding canonical bytes.
CANONICAL_CONFIG = ConfigDict(
    # Base64 in JSON for both directions
    ser_json_bytes="base64",
    val_json_bytes="base64",
)


class CanonicalModel(BaseModel):
    """Base class for models holding canonical values.

    Fields are declared with the serde annotations:

    Example:
        >>> from canonbridge import Compressed, Uncompressed
        >>> from canonbridge.curves import P256Point
        >>> class Commitment(CanonicalModel):
        ...     point: Compressed[P256Point]
        ...     blinding: Uncompressed[P256Point]
    """

    model_config = ConfigDict(
        **CANONICAL_CONFIG,
        # Allow arbitrary types (plain value types without annotations)
        arbitrary_types_allowed=True,
        # Models are immutable values
        frozen=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )
