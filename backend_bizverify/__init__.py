"""
Backend BizVerify — business wallet verification service.

Accepts a wallet address and business name, derives activity metrics for the
wallet, applies a fixed eligibility rule, and stores one up-to-date verdict per
wallet. Modular layout: verification (validator, oracle, evaluator), database
(keyed upsert store), and api_server (handler + FastAPI shell).
"""

__version__ = "0.1.0"
