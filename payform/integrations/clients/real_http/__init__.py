"""
Real HTTP integration clients.

These clients communicate with the payment service over HTTP and return data
shaped according to payform/integrations/contracts/*.
"""

from .payments import PaymentsClient

__all__ = ["PaymentsClient"]
