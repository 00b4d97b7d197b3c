"""Configuration module - re-exports all config values."""
from .redis import *
