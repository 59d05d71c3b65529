"""
Portfolio API service layer.

Record kinds and the service that writes them, including uploads of attached images.
"""

from .records import (
    CERTIFICATION,
    CONTACT,
    EXPERIENCE,
    PROFILE,
    PROJECT,
    TESTIMONIAL,
    RecordKind,
    RecordService,
)

__all__ = [
    'RecordKind', 'RecordService',
    'PROFILE', 'PROJECT', 'EXPERIENCE', 'CERTIFICATION', 'CONTACT', 'TESTIMONIAL',
]
