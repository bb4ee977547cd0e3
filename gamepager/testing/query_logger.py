import sqlalchemy as sa


class QueryCounter:
    """ Counts the number of queries

    Example:
        with QueryCounter(engine) as counter:
            ...
        assert counter.n == 1
    """

    def __init__(self, engine: sa.engine.Engine):
        self.engine = engine
        self.n = 0

    def start_logging(self):
        sa.event.listen(self.engine, "after_cursor_execute", self._after_cursor_execute_event_handler, named=True)

    def stop_logging(self):
        sa.event.remove(self.engine, "after_cursor_execute", self._after_cursor_execute_event_handler)

    def _after_cursor_execute_event_handler(self, **kw):
        self.n += 1

    # Context manager

    def __enter__(self):
        self.start_logging()
        return self

    def __exit__(self, *exc):
        self.stop_logging()
        return False
