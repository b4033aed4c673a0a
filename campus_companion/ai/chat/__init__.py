"""
Campus chat module.

Answers student questions about campus resources, events and clubs, either
through a completion provider grounded in current campus content or through
fixed keyword rules.
"""
