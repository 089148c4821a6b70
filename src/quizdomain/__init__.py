"""Quiz domain model, answer sheet scoring and spreadsheet question import."""

__version__ = "0.1.0"
