"""HTTP controller layer for lunch group shuffling."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field, field_validator

from shuffle_lunch.domain.models import Member, MemberValidationError
from shuffle_lunch.repository.roster_repository import RosterRepository, RosterValidationError
from shuffle_lunch.services.grouping_service import (
    AllocationInvariantError,
    InsufficientMembersError,
    LunchShuffleService,
    NoEligibleGroupError,
)
from shuffle_lunch.services.notification_service import NotificationError, SlackNotifier
from shuffle_lunch.services.report_service import render_report, summarize_group
from shuffle_lunch.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["shuffle"])


class MemberPayload(BaseModel):
    id: str = Field(min_length=1)
    slack_id: str
    department: str
    joined_date: date | None = None
    every_weekday: bool = False
    monday: bool = False
    tuesday: bool = False
    wednesday: bool = False
    thursday: bool = False
    friday: bool = False

    @field_validator("department")
    @classmethod
    def validate_department(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("department must be non-empty")
        return value

    def to_member(self) -> Member:
        return Member.from_attributes(
            member_id=self.id,
            contact_handle=self.slack_id,
            department_text=self.department,
            every_weekday=self.every_weekday,
            monday=self.monday,
            tuesday=self.tuesday,
            wednesday=self.wednesday,
            thursday=self.thursday,
            friday=self.friday,
            joined_date=self.joined_date,
        )


class ShuffleRequest(BaseModel):
    members: list[MemberPayload]
    group_size: int | None = Field(default=None, gt=0)
    seed: int | None = Field(default=None, ge=0)


class GroupResponse(BaseModel):
    available_days: list[str]
    same_department_pair_count: int = Field(ge=0)
    same_department_pairs: list[list[str]]
    member_ids: list[str]
    slack_ids: list[str]


class ShuffleResponse(BaseModel):
    group_size: int = Field(gt=0)
    groups: list[GroupResponse]


class RosterShuffleRequest(BaseModel):
    group_size: int | None = Field(default=None, gt=0)
    seed: int | None = Field(default=None, ge=0)
    notify: bool = False


class RosterShuffleResponse(ShuffleResponse):
    notified: bool


def get_shuffle_service(request: Request) -> LunchShuffleService:
    service = getattr(request.app.state, "shuffle_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Shuffle service is not initialized",
        )
    return service


def get_roster_repository(request: Request) -> RosterRepository:
    repository = getattr(request.app.state, "roster_repository", None)
    if repository is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Roster repository is not initialized",
        )
    return repository


def get_notifier(request: Request) -> SlackNotifier:
    notifier = getattr(request.app.state, "notifier", None)
    if notifier is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notifier is not initialized",
        )
    return notifier


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post(
    "/shuffle_lunch",
    response_model=ShuffleResponse,
    status_code=status.HTTP_200_OK,
)
async def shuffle_lunch(
    payload: ShuffleRequest,
    service: LunchShuffleService = Depends(get_shuffle_service),
) -> ShuffleResponse:
    """Partition the posted roster into lunch groups."""
    try:
        members = [item.to_member() for item in payload.members]
        result = service.shuffle(members, group_size=payload.group_size, seed=payload.seed)
        return ShuffleResponse(
            group_size=result.group_size,
            groups=[GroupResponse(**summarize_group(group)) for group in result.groups],
        )
    except (MemberValidationError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except (InsufficientMembersError, AllocationInvariantError) as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    except NoEligibleGroupError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected shuffle failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to shuffle lunch groups",
        ) from exc


@router.post(
    "/shuffle_lunch/roster",
    response_model=RosterShuffleResponse,
    status_code=status.HTTP_200_OK,
)
async def shuffle_configured_roster(
    payload: RosterShuffleRequest,
    service: LunchShuffleService = Depends(get_shuffle_service),
    repository: RosterRepository = Depends(get_roster_repository),
    notifier: SlackNotifier = Depends(get_notifier),
) -> RosterShuffleResponse:
    """Shuffle the server-side roster CSV and optionally post the report to Slack."""
    try:
        members = repository.load_members()
        result = service.shuffle(members, group_size=payload.group_size, seed=payload.seed)
        notified = notifier.post_report(render_report(result.groups)) if payload.notify else False
        return RosterShuffleResponse(
            group_size=result.group_size,
            groups=[GroupResponse(**summarize_group(group)) for group in result.groups],
            notified=notified,
        )
    except (RosterValidationError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except (InsufficientMembersError, AllocationInvariantError) as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    except NoEligibleGroupError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except NotificationError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected roster shuffle failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to shuffle lunch groups",
        ) from exc
