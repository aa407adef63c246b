"""
Singleton and observer that holds the current session counters.
Allows other systems to listen for updates.
"""


class StateManager:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(StateManager, cls).__new__(cls)
            cls._instance.reset()
        return cls._instance

    def reset(self):
        self.state = {"session": 0, "turn": 0, "gamesFinished": 0}
        self.observers = []

    def subscribe(self, callback):
        self.observers.append(callback)

    def updateState(self, **changes):
        self.state = {**self.state, **changes}
        for callback in list(self.observers):
            callback(dict(self.state))
