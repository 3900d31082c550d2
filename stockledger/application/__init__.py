"""
Application layer - Use cases, DTOs, and service wiring.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Building the service graph once at startup

Use cases are the only entry point for API handlers that write.
"""

from stockledger.application.services import LedgerServices, build_services, wire_services

__all__ = ["LedgerServices", "build_services", "wire_services"]
