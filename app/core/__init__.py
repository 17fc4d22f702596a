"""
Shared building blocks for the orders and payments apps.

    core.models          BaseModel (timestamps)
    core.model_mixins    UUIDPrimaryKeyMixin, SoftDeleteMixin, OrderableMixin
    core.managers        SoftDeleteManager, SoftDeleteQuerySet
    core.services        BaseService (logger, atomic)
    core.exceptions      BaseApplicationError, ValidationError, NotFoundError
    core.helpers         validate_uuid, calculate_pagination
    core.views           health_check
"""
