STATUS_ALL = "all"


def filter_tasks(tasks, query="", status=STATUS_ALL):
    """Project ``tasks`` through the search box and the status dropdown.

    The search is a case-insensitive substring match on title or description;
    the status filter is applied afterwards and skipped for ``"all"``.
    """
    filtered = list(tasks)

    if query:
        needle = query.lower()
        filtered = [
            task
            for task in filtered
            if needle in (task.get("title") or "").lower()
            or needle in (task.get("description") or "").lower()
        ]

    if status and status != STATUS_ALL:
        filtered = [task for task in filtered if task.get("status") == status]

    return filtered
