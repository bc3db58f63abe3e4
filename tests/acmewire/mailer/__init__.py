from abc import ABC, abstractmethod


class MailerInterface(ABC):
    @abstractmethod
    def send(self, message): ...


class Mailer(MailerInterface):
    def __init__(self):
        self.foo = 0

    def send(self, message):
        return f"sent: {message}"


class Single:
    pass


class Shared:
    @staticmethod
    def __shared__():
        return True


class NotShared:
    def __shared__(self):
        return True
