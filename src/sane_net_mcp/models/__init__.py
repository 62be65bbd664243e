"""Value objects decoded from daemon responses."""

from .device import DeviceRecord
from .parameters import FrameParameters
