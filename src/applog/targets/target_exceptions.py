class WriteError(Exception):
    def __init__(self, target, reason, details=None):
        self.target = target
        self.reason = reason
        self.details = details
        super().__init__(reason)

class OpenFailedError(WriteError):
    pass

class TargetMissingError(WriteError):
    pass
