"""
Service layer helpers that orchestrate request handling and domain logic.
"""

from .request_handler import AvailabilityRequestHandler, HandlerResponse, MatcherProtocol

__all__ = ["AvailabilityRequestHandler", "HandlerResponse", "MatcherProtocol"]
