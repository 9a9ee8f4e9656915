from .controller import LookupStage, SuggestionController
from .presenter import PageState, ResultPresenter
from .transport import DirectTransport, LookupTransport, ProxyTransport, build_transport

__all__ = [
    "DirectTransport",
    "LookupStage",
    "LookupTransport",
    "PageState",
    "ProxyTransport",
    "ResultPresenter",
    "SuggestionController",
    "build_transport",
]
