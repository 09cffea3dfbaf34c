from identity.application.queries.audit_names import AuditNameProjection, audit_ids

__all__ = ["AuditNameProjection", "audit_ids"]
