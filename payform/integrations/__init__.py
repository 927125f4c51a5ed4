"""
Integrations layer.
This package contains all code used to communicate with the payment service:
- contracts/  request/response shapes shared by real and mock implementations
- clients/    the real HTTP client and the mock reply builder

Key rule:
- The controller MUST NOT talk HTTP directly; it goes through PaymentsClient.
"""
