""" SqlAlchemy model introspection """
