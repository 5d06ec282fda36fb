"""HR Portal package.

Feature modules (auth, routing, profiles, attendance, payments, ...) each carry
their own model/repository/service layers with a thin Flask controller on top.
"""
