from .env import Env as Env
from .env import load_env as load_env
from .errors import EmptyRingError as EmptyRingError
from .errors import RingError as RingError
from .errors import RingPositionMissingError as RingPositionMissingError
from .errors import UnknownHasherError as UnknownHasherError
from .errors import UnknownHostError as UnknownHostError
from .hashing import Blake2bHasher as Blake2bHasher
from .hashing import Hasher as Hasher
from .hashing import MD5Hasher as MD5Hasher
from .hashing import get_hasher as get_hasher
from .ring import AsyncLockedRing as AsyncLockedRing
from .ring import LockedRing as LockedRing
from .ring import Ring as Ring
from .ring import RingConfig as RingConfig
