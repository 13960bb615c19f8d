"""Base controller device abstraction"""
import abc

from core.state import RawControllerState


class ControllerDevice(abc.ABC):
    @abc.abstractmethod
    def open(self, device_id: int):
        """Open controller `device_id`; raises DeviceOpenError."""
        raise NotImplementedError

    @abc.abstractmethod
    def read(self) -> RawControllerState:
        """Snapshot the controller; raises DeviceReadError."""
        raise NotImplementedError

    @abc.abstractmethod
    def axis_count(self) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    def button_count(self) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    def close(self):
        raise NotImplementedError

    def name(self) -> str:
        return type(self).__name__
