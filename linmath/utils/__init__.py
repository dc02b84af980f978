from .formatting import vec_to_string, mat_to_string
from .log import configure_logging

__all__ = ['vec_to_string', 'mat_to_string', 'configure_logging']
