class ConfigurationError(Exception):
    """Fatal build configuration problem. Aborts the build step."""

    def __init__(self, module: str, reason: str):
        self.module = module
        self.reason = reason
        super().__init__(f"[{module}] {reason}")
