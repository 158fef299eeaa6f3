"""Lambda CRUD API over the DynamoDB course enrollment table."""

__version__ = "0.1.0"
