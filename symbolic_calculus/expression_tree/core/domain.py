import numpy as np
from enum import Enum
from typing import Union

from ...errors import DomainMismatch

Number = Union[int, float, complex, np.number]


def format_real(value: float) -> str:
  """Integral values without a decimal point, others in shortest round-trip form"""
  if value == 0:
    return "0"
  if np.isfinite(value) and abs(value) < 1e16 and value == np.floor(value):
    return str(int(value))
  return np.format_float_positional(value, trim='-')


class NumericDomain(Enum):
  """The value type expressions evaluate to"""
  REAL = 'real'
  COMPLEX = 'complex'

  @classmethod
  def resolve(cls, domain: Union[str, 'NumericDomain']) -> 'NumericDomain':
    if isinstance(domain, cls):
      return domain
    try:
      return cls(str(domain).lower())
    except ValueError:
      raise ValueError(f"Unknown numeric domain: {domain!r}") from None

  @property
  def dtype(self):
    return np.float64 if self is NumericDomain.REAL else np.complex128

  @property
  def is_ordered(self) -> bool:
    return self is NumericDomain.REAL

  def coerce(self, value: Number):
    if self is NumericDomain.COMPLEX:
      return np.complex128(value)
    if np.iscomplexobj(value):
      if np.imag(value) != 0:
        raise DomainMismatch(f"Complex value {value} cannot be used in the real domain")
      value = np.real(value)
    return np.float64(value)

  def coerce_array(self, values) -> np.ndarray:
    arr = np.asarray(values)
    if self is NumericDomain.REAL and np.iscomplexobj(arr):
      if np.any(np.imag(arr) != 0):
        raise DomainMismatch("Complex values cannot be used in the real domain")
      arr = np.real(arr)
    return np.ascontiguousarray(arr, dtype=self.dtype)

  def zero(self):
    return self.dtype(0)

  def one(self):
    return self.dtype(1)

  def is_zero(self, value: Number) -> bool:
    return self.coerce(value) == self.zero()

  def is_one(self, value: Number) -> bool:
    return self.coerce(value) == self.one()

  def format_constant(self, value: Number) -> str:
    if self is NumericDomain.REAL:
      real = float(self.coerce(value))
      if real < 0:
        return f"({format_real(real)})"
      return format_real(real)

    c = self.coerce(value)
    real, imag = float(c.real), float(c.imag)
    if real != 0 and imag != 0:
      if imag >= 0:
        return f"({format_real(real)} + {format_real(imag)}i)"
      return f"({format_real(real)} - {format_real(-imag)}i)"
    if real == 0 and imag == 0:
      return format_real(0.0)
    if real == 0:
      return f"{format_real(imag)}i"
    return format_real(real)
