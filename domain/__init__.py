"""
Domain layer: Business logic with minimal external dependencies.

Contains:
- categories: hot/warm/cold scale and score bucketing
- schemas: Pydantic models for AI analyses, expert ratings and extraction validations
- evaluation: Agreement, correlation, classification and extraction statistics
"""

from domain.categories import CATEGORIES, Category, score_to_category
from domain.schemas import AIAnalysis, ComponentScore, ExpertRating, ExtractionValidation, FieldValidation

__all__ = [
    "Category",
    "CATEGORIES",
    "score_to_category",
    "AIAnalysis",
    "ComponentScore",
    "ExpertRating",
    "ExtractionValidation",
    "FieldValidation",
]
