from conneg.acceptparse import AcceptEntry, create_accept_header, parse_accept
from conneg.action import Action
from conneg.exceptions import ConnegError, RegistryFrozen, UnknownFormat
from conneg.mimetype import MimeType
from conneg.negotiation import NegotiationResult, RestrictionPolicy, acceptable, negotiate
from conneg.registry import FormatRegistry, default_registry
from conneg.request import Request
from conneg.response import Response

__all__ = [
    "AcceptEntry",
    "Action",
    "ConnegError",
    "FormatRegistry",
    "MimeType",
    "NegotiationResult",
    "RegistryFrozen",
    "Request",
    "Response",
    "RestrictionPolicy",
    "UnknownFormat",
    "acceptable",
    "create_accept_header",
    "default_registry",
    "negotiate",
    "parse_accept",
]
