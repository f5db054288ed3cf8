# errors.py - Bootstrap failures and per-step results

OK = 'ok'
ADVISORY = 'advisory'
FATAL = 'fatal'


class BootstrapError(Exception):
    """Fatal startup failure: the process must not continue"""


class ConfigError(BootstrapError):
    def __init__(self, variable):
        self.variable = variable
        super().__init__(f"{variable} is required (set it in the environment or in .env)")


class DatabaseConnectionError(BootstrapError):
    pass


class IndexConvergenceError(BootstrapError):
    def __init__(self, collection, error):
        self.collection = collection
        self.error = error
        super().__init__(f"failed to create {collection} indexes: {error}")


class StepResult:
    """Outcome of one bootstrap step.

    Steps never terminate the process themselves; they report ``ok``,
    ``advisory`` (logged, startup continues) or ``fatal`` and the
    orchestrator decides what happens next.
    """

    def __init__(self, step, status=OK, message='', error=None, collection=None, **counters):
        self.step = step
        self.status = status
        self.message = message
        self.error = error
        self.collection = collection
        self.counters = counters

    @classmethod
    def ok(cls, step, message='', collection=None, **counters):
        return cls(step, OK, message, collection=collection, **counters)

    @classmethod
    def advisory(cls, step, error, message='', collection=None, **counters):
        return cls(step, ADVISORY, message or str(error), error=error, collection=collection, **counters)

    @classmethod
    def fatal(cls, step, error, message='', collection=None, **counters):
        return cls(step, FATAL, message or str(error), error=error, collection=collection, **counters)

    @property
    def is_ok(self):
        return self.status == OK

    @property
    def is_fatal(self):
        return self.status == FATAL

    def to_dict(self):
        data = {
            "step": self.step,
            "status": self.status,
            "message": self.message,
        }
        if self.collection:
            data["collection"] = self.collection
        if self.error is not None:
            data["error"] = str(self.error)
            data["error_type"] = type(self.error).__name__
        data.update(self.counters)
        return data

    def __repr__(self):
        return f"StepResult({self.step!r}, {self.status!r}, {self.message!r})"
