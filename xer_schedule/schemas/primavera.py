"""
Primavera P6 schedule payload schemas.

Field names follow the snake_case model attributes; aliases carry the
camelCase keys of the serialized payload.
"""

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class _PayloadModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='forbid')


class ProjectSchema(_PayloadModel):
    """Project header of an imported schedule."""
    project_id: str = Field(alias="projectId", description="P6 proj_id")
    project_name: str = Field(alias="projectName", description="Short name, falling back to full name")
    data_date: Optional[datetime] = Field(default=None, alias="dataDate", description="Last recalculation (status) date")
    start_date: Optional[datetime] = Field(default=None, alias="startDate", description="Planned start")
    finish_date: Optional[datetime] = Field(default=None, alias="finishDate", description="Planned finish")


class TaskSchema(_PayloadModel):
    """Schedule activity with calculated total float."""
    task_id: str = Field(alias="taskId", description="Unique task identifier")
    task_code: str = Field(alias="taskCode", description="Activity ID shown to users")
    task_name: str = Field(alias="taskName", description="Activity name")
    start_date: Optional[datetime] = Field(default=None, alias="startDate", description="Actual start, else target start")
    finish_date: Optional[datetime] = Field(default=None, alias="finishDate", description="Actual finish, else target finish")
    duration: Optional[float] = Field(default=None, description="Target duration in hours")
    percent_complete: Optional[float] = Field(default=None, alias="percentComplete", ge=0, le=100,
                                              description="Physical percent complete")
    total_float: Optional[float] = Field(default=None, alias="totalFloat",
                                         description="Calculated total float in hours (signed)")
    wbs_id: Optional[str] = Field(default=None, alias="wbsId", description="FK to WBS node")
    calendar_id: Optional[str] = Field(default=None, alias="calendarId", description="FK to calendar")
    task_type: Optional[str] = Field(default=None, alias="taskType", description="TT_Task, TT_Mile, ...")
    status: Optional[str] = Field(default=None, description="TK_NotStart, TK_Active, TK_Complete")
    cstr_type: Optional[str] = Field(default=None, alias="cstrType", description="Constraint type")
    cstr_date: Optional[str] = Field(default=None, alias="cstrDate", description="Constraint date as exported")


class WBSSchema(_PayloadModel):
    """Work breakdown structure node."""
    wbs_id: str = Field(alias="wbsId", description="Unique WBS identifier")
    wbs_name: str = Field(alias="wbsName", description="WBS name")
    wbs_short_name: str = Field(alias="wbsShortName", description="WBS code")
    parent_wbs_id: Optional[str] = Field(default=None, alias="parentWbsId", description="Parent WBS node")
    seq_num: Optional[int] = Field(default=None, alias="seqNum", description="Sort order among siblings")


class RelationshipSchema(_PayloadModel):
    """Predecessor relationship."""
    pred_task_id: str = Field(alias="predTaskId", description="Predecessor task")
    task_id: str = Field(alias="taskId", description="Successor task")
    pred_type: Literal["PR_FS", "PR_SS", "PR_FF", "PR_SF"] = Field(
        alias="predType", description="Finish-to-Start, Start-to-Start, Finish-to-Finish or Start-to-Finish")
    lag: Optional[float] = Field(default=None, description="Lag in hours (signed)")


class CalendarSchema(_PayloadModel):
    """Calendar reference."""
    calendar_id: str = Field(alias="calendarId", description="Unique calendar identifier")
    calendar_name: str = Field(alias="calendarName", description="Calendar name")


class ScheduleSchema(_PayloadModel):
    """Complete payload of one XER import."""
    project: Optional[ProjectSchema] = None
    tasks: List[TaskSchema] = Field(default_factory=list)
    wbs: List[WBSSchema] = Field(default_factory=list)
    relationships: List[RelationshipSchema] = Field(default_factory=list)
    calendars: List[CalendarSchema] = Field(default_factory=list)
