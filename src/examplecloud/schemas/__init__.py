"""Typed models for Example Cloud resources."""

from .common import APIModel, Envelope, Link

__all__ = ["APIModel", "Envelope", "Link"]
