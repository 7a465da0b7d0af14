from . import gate_service, resolver, submission_service

__all__ = ["gate_service", "resolver", "submission_service"]
