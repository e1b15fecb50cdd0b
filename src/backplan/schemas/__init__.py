"""Pydantic schemas for documents exchanged with the outside world."""

from .plan import PlanDocument, PlanFormatError, PlanTask

__all__ = ["PlanDocument", "PlanFormatError", "PlanTask"]
