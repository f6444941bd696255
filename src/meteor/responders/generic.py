# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pass-through responder: records the exchange and decodes nothing."""

from __future__ import annotations

from ..errors import DecodeError
from ..http.models import HttpResponse
from .base import BaseResponder


class GenericResponder(BaseResponder):
    """
    Hands back the raw response untouched.

    Useful when the caller only wants headers/status or forwards the body elsewhere.
    Success and failure are always ``None``.
    """

    def __init__(self) -> None:
        super().__init__()

    def _decode(self, response: HttpResponse) -> DecodeError | None:  # noqa: ARG002
        return None


def generic_responder() -> GenericResponder:
    return GenericResponder()


__all__ = ["GenericResponder", "generic_responder"]
