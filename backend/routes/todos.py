"""Spiritual to-do list routes. Every list belongs to a signed-in user."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from deps import get_db, get_current_user
from models import SpiritualTodo, User
from schemas import TodoCreate, TodoResponse, TodoUpdate

router = APIRouter(prefix="/api/todos", tags=["todos"])


def _owned_todo(db: Session, todo_id: int, user: User) -> SpiritualTodo:
    todo = (
        db.query(SpiritualTodo)
        .filter(SpiritualTodo.id == todo_id, SpiritualTodo.user_id == user.id)
        .first()
    )
    if not todo:
        raise HTTPException(status_code=404, detail="To-do not found")
    return todo


@router.get("", response_model=List[TodoResponse])
async def list_todos(
    completed: Optional[bool] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    query = db.query(SpiritualTodo).filter(SpiritualTodo.user_id == user.id)
    if completed is not None:
        query = query.filter(SpiritualTodo.completed == completed)
    todos = query.order_by(SpiritualTodo.created_at.desc(), SpiritualTodo.id.desc()).all()
    return [TodoResponse.model_validate(t) for t in todos]


@router.post("", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
async def create_todo(
    todo_data: TodoCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    todo = SpiritualTodo(
        user_id=user.id,
        text=todo_data.text,
        completed=False,
        source=todo_data.source,
    )
    db.add(todo)
    db.commit()
    db.refresh(todo)
    return TodoResponse.model_validate(todo)


@router.patch("/{todo_id}", response_model=TodoResponse)
async def update_todo(
    todo_id: int,
    updates: TodoUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    todo = _owned_todo(db, todo_id, user)
    if updates.text is not None:
        text = updates.text.strip()
        if not text:
            raise HTTPException(status_code=400, detail="To-do text cannot be empty")
        todo.text = text
    if updates.completed is not None:
        todo.completed = updates.completed
    db.commit()
    db.refresh(todo)
    return TodoResponse.model_validate(todo)


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo(
    todo_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    todo = _owned_todo(db, todo_id, user)
    db.delete(todo)
    db.commit()
