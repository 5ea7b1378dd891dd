from typing import List

from fastapi import APIRouter, Depends, Response, status

from taskboard.routers.deps import get_assignee_directory
from taskboard.schemas.user import AssigneeCreate, AssigneeOut
from taskboard.utils.auth import get_current_user

router = APIRouter(prefix="/assignees", dependencies=[Depends(get_current_user)])


@router.get("", response_model=List[str])
def list_assignees(directory=Depends(get_assignee_directory)):
    return directory.list()


@router.post("", response_model=AssigneeOut, status_code=status.HTTP_201_CREATED)
def add_assignee(assignee: AssigneeCreate, directory=Depends(get_assignee_directory)):
    name = directory.add(assignee.name, assignee.password)
    return {"name": name}


@router.delete("/{name:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_assignee(name: str, directory=Depends(get_assignee_directory)):
    directory.remove(name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
