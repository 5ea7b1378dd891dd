from .user import UserCreate, UserLogin, UserRegistered, AssigneeCreate, AssigneeOut
from .tokens import Token, TokenData
from .tasks import TaskCreate, TaskUpdate, TaskOut, AssigneeProgress, AssigneeProgressUpdate
