"""AuditedSession: the ORM session class every unit of work uses.

Binds the flush-time audit stamper and the soft-delete read filter to one
Session subclass, so any session built from the application's session
factory enforces both without per-service code.
"""

from sqlalchemy import event
from sqlalchemy.orm import Session

from orgadmin.infrastructure.persistence.audit import forget_inserted, stamp_before_flush
from orgadmin.infrastructure.persistence.soft_delete import apply_soft_delete_filter


class AuditedSession(Session):
    """Session that stamps auditable changes and hides soft-deleted rows."""


event.listen(AuditedSession, "before_flush", stamp_before_flush)
event.listen(AuditedSession, "after_transaction_end", forget_inserted)
event.listen(AuditedSession, "do_orm_execute", apply_soft_delete_filter)
