"""Routing — attribute route model, configuration-time route table, and
the compiled router the table is frozen into.
"""
