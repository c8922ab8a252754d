"""
Debitor store: guarded database access for debitor records.

Usage:
    from debitor_store.dependencies import build_connection_guard, build_debitor_repository

    guard = build_connection_guard(on_trip=lambda result: notify_user())
    repository = build_debitor_repository(guard)
    repository.search_and_filter("acme")
"""
