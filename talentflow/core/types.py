"""
TalentFlow: Core Type Definitions

This module defines common type aliases shared across the TalentFlow
codebase. It exists to centralise frequently used type definitions and
avoid circular imports between higher-level modules.

Key responsibilities:
- Provide canonical aliases for JSON-shaped documents and raw responses
- Improve readability of function signatures

External dependencies:
- typing: Standard library typing primitives only

Database tables accessed:
- None (pure type definitions)

Thread safety: Thread-safe (no mutable global state)

Author: TalentFlow Team
Created: 2026-10-12
Last Modified: 2026-10-12
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

from typing import Any, Dict, Mapping, TypeAlias

# ============================================================================
# Type Aliases
# ============================================================================

# JSON-compatible document as stored in the document store (camelCase keys)
DocumentDict: TypeAlias = Dict[str, Any]

# Raw answers keyed by question id, exactly as a filling session produced them
RawResponses: TypeAlias = Mapping[str, Any]

