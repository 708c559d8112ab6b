"""Interfaces/abstracciones del Core.

Define contratos (Protocol) que implementan adaptadores concretos.
"""

from core.interfaces.output_parser import OutputParser
from core.interfaces.task_api import RemoteTaskApi

__all__ = ["OutputParser", "RemoteTaskApi"]
