class ConfigError(Exception):
    def __init__(
        self,
        message="Invalid restwrap configuration. Check the \033[1mRESTWRAP_*\033[22m environment variables.",
    ):
        self.message = message
        super().__init__(self.message)
