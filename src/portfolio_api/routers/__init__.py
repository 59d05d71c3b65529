"""
HTTP routers for the Portfolio API.

One router per record kind, mounted under `/api`; `health` is mounted at the root.
"""

from . import certifications, contact, experience, health, profile, projects, testimonials

API_ROUTERS = [
    (profile.router, "profile"),
    (projects.router, "projects"),
    (experience.router, "experience"),
    (certifications.router, "certifications"),
    (contact.router, "contact"),
    (testimonials.router, "testimonials"),
]

__all__ = ['API_ROUTERS', 'health']
