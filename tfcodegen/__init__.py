"""Terraform Plugin Framework schema code generator."""

__version__ = "0.1.0"
