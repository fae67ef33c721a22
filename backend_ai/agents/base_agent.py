import logging


class BaseAgent:
    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(f"backend_ai.agents.{name}")

    def run(self, *args, **kwargs):
        raise NotImplementedError("Agent must implement run()")
