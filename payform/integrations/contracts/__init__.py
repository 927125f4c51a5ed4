"""
Contracts (data models).

Request/response shapes for the payment service. Both the real HTTP client
and the mock service use these, so payload formats are defined once.
"""
