# devflow-backend/workspace/migration.py
"""
One-time cleanup of stale seed data.

Early deployments seeded the workspace with placeholder members. If every
member is one of those placeholders, the members are dropped together with
the tasks assigned to them. Running it on a clean workspace is a no-op.

Operates on stored documents (lists of dicts) so the data migration can use
it with historical models.
"""
LEGACY_PLACEHOLDER_NAMES = frozenset({"Rahul Sharma", "Ananya Singh", "Vikas Patel"})


def has_only_legacy_members(members) -> bool:
    return bool(members) and all(
        m.get("name") in LEGACY_PLACEHOLDER_NAMES for m in members
    )


def purge_legacy_placeholders(members, tasks):
    """
    Returns (members, tasks, changed).
    """
    if not has_only_legacy_members(members):
        return members, tasks, False

    kept_tasks = [t for t in tasks if t.get("assignedTo") not in LEGACY_PLACEHOLDER_NAMES]
    return [], kept_tasks, True
