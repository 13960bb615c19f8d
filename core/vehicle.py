"""Vehicle control interface used by the dispatcher"""
import abc

from core.state import FlightData


class VehicleControl(abc.ABC):
    @abc.abstractmethod
    def set_slow_mode(self):
        raise NotImplementedError

    @abc.abstractmethod
    def set_fast_mode(self):
        raise NotImplementedError

    @abc.abstractmethod
    def bounce(self):
        raise NotImplementedError

    @abc.abstractmethod
    def take_off(self):
        raise NotImplementedError

    @abc.abstractmethod
    def land(self):
        raise NotImplementedError

    @abc.abstractmethod
    def throw_take_off(self):
        raise NotImplementedError

    @abc.abstractmethod
    def palm_land(self):
        raise NotImplementedError

    @abc.abstractmethod
    def take_picture(self):
        raise NotImplementedError

    @abc.abstractmethod
    def left_flip(self):
        raise NotImplementedError

    @abc.abstractmethod
    def right_flip(self):
        raise NotImplementedError

    @abc.abstractmethod
    def forward_flip(self):
        raise NotImplementedError

    @abc.abstractmethod
    def back_flip(self):
        raise NotImplementedError

    @abc.abstractmethod
    def get_flight_data(self) -> FlightData:
        raise NotImplementedError
