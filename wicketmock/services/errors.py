#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Composition errors.

Every error is fatal to the render pass that raised it; nothing is retried.
A missing top-level fragment is not an error, see ``Composer.render``.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Optional


# -----------------------------------------------------------------------------

class CompositionError(Exception):
    """Base class.  ``fragment`` names the fragment being processed, if known."""

    kind = "composition_error"

    def __init__(self, message: str, fragment: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.fragment = fragment


class AncestorNotFound(CompositionError):
    kind = "ancestor_not_found"


class MissingChildSlot(CompositionError):
    kind = "missing_child_slot"


class PanelNotFound(CompositionError):
    kind = "panel_not_found"


class MalformedVariableDeclaration(CompositionError):
    kind = "malformed_variable_declaration"


class FragmentUnreadable(CompositionError):
    kind = "fragment_unreadable"


class UndefinedVariable(CompositionError):
    kind = "undefined_variable"


class CyclicTemplateReference(CompositionError):
    kind = "cyclic_template_reference"

    def __init__(self, message: str, chain: list[str], fragment: Optional[str] = None) -> None:
        super().__init__(message, fragment)
        self.chain = list(chain)


# -----------------------------------------------------------------------------
