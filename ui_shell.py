# The screen surface driven by the controller: title, loading indicator, alert, toolbar.

from abc import ABC, abstractmethod


class UiShell(ABC):

    @abstractmethod
    def set_title(self, title: str):
        pass

    @abstractmethod
    def set_loading_visible(self, visible: bool):
        pass

    @abstractmethod
    def present_alert(self, title: str, message: str, action_label: str):
        """Shows a modal alert with a single acknowledgement action."""
        pass

    @abstractmethod
    def set_toolbar(self, labels: list[str]):
        pass


class ConsoleShell(UiShell):
    """Prints every screen change to the terminal."""

    def __init__(self):
        self.title = ""
        self.loading_visible = False

    def set_title(self, title: str):
        self.title = title
        print(f"== {title} ==")

    def set_loading_visible(self, visible: bool):
        if visible and not self.loading_visible:
            print("Loading...")
        self.loading_visible = visible

    def present_alert(self, title: str, message: str, action_label: str):
        print(f"\n[{title}] {message}  ({action_label})")

    def set_toolbar(self, labels: list[str]):
        for i, label in enumerate(labels, start=1):
            print(f"{i}. {label}")
