# app/services/__init__.py
"""
Service layer root package.

Each subpackage implements application use-cases on top of:

- SQLAlchemy models (app.models.*)
- Repositories (app.repositories.*)
- Common service infrastructure (app.services.base.*)

Services return ServiceResult values and never raise for business outcomes.
"""
