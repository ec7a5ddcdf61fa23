"""Domain layer for spendwise application.

Services live in their own modules (``spendwise.domain.transaction``,
``spendwise.domain.statement_import``, ...). They are not re-exported here
because the database layer imports ``spendwise.domain.entities``.
"""
