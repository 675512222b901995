"""Personnel Hub package.

Feature modules (accounts, employees, leaves, advances, timesheets, payroll,
payments) each follow the same shape: a frozen dataclass model, a repository
Protocol with its MySQL implementation, a service holding the business rules
and a thin Flask controller.
"""
