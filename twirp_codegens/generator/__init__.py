"""Twirp middleware code generator."""

from .classifier import FieldClassifier as FieldClassifier
from .classifier import is_sensitive as is_sensitive
from .driver import generate as generate
from .driver import run as run
from .emitter import DecoratorKind as DecoratorKind
from .emitter import DecoratorSpec as DecoratorSpec
from .emitter import Emitter as Emitter
from .errors import *
from .registry import Registry as Registry
from .types import *
