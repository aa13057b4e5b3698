"""Green Market marketplace API.

REST backend for user accounts, the product catalogue and payment gateway
webhooks, built on FastAPI and SQLModel.
"""

__version__ = "0.1.0"
