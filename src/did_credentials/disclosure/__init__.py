"""Selective disclosure: request construction and response parsing.

* **RequestBuilder** -- signed ``shareReq`` tokens.
* **ResponseParser** -- ``shareResp`` tokens into flattened profiles.
* **ResponseBuilder** -- signed ``shareResp`` tokens for the responder.
"""
from __future__ import annotations

from did_credentials.disclosure.request import RequestBuilder
from did_credentials.disclosure.response import ResponseBuilder, ResponseParser

__all__ = [
    "RequestBuilder",
    "ResponseBuilder",
    "ResponseParser",
]
