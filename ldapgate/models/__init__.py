from .base import BaseModel
from .account import Account
