"""TeamTime package.

Feature modules (users, attendance, breaks, leaves, tasks, ...) each carry a
domain model, a repository interface, a MySQL repository, a service and a thin
Flask controller.
"""
