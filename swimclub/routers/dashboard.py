"""
dashboard.py

회계 담당자(treasurer) 대시보드 API 모음.

주요 기능:
- 전체 회원 예상 연회비 합계
- 회원 납부 상태 목록 (상태 필터 지원: ALL_BILLS_PAID / MISSING_PAYMENT /
  OVERDUE_BILLS / PENDING_PAYMENT)
- 청구서 상태별 회원 목록 (예: 부분 납부 청구서가 있는 회원)
- 회원 납부 현황 CSV / Excel(xlsx) 내보내기

설계 원칙:
- 집계 로직은 BillingReportEngine 에 위임
- 이 라우터는 요청/응답 포맷 처리에만 집중

관련 파일:
- swimclub.services.reports        : 합계 / 상태별 필터 / 현황 표
- swimclub.services.payment_status : 회원 납부 상태 분류

"""

import csv
import io
from starlette.responses import StreamingResponse, Response
from openpyxl import Workbook

from fastapi import APIRouter, Depends, Query

from swimclub.core.config import settings
from swimclub.core.deps import get_member_store, get_report_engine
from swimclub.models.billing import BillingStatus, MemberPaymentStatus
from swimclub.schemas.billing import DashboardMemberRow, TotalExpectedResponse
from swimclub.services.members import MemberStore
from swimclub.services.reports import BillingReportEngine

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

EXPORT_HEADER = ["member_id", "name", "email", "phone", "membership", "status", "fee", "outstanding"]


def _dashboard_row(r: dict) -> DashboardMemberRow:
    m = r["member"]
    return DashboardMemberRow(
        member_id=m.id,
        name=m.name,
        email=m.email,
        phone=m.phone,
        membership_description=m.membership_description,
        fee=r["fee"],
        status=r["status"],
        outstanding=r["outstanding"],
    )


def _export_row(r: dict) -> list:
    m = r["member"]
    return [
        m.id,
        m.name,
        m.email,
        m.phone,
        m.membership_description,
        r["status"].value,
        r["fee"],
        r["outstanding"],
    ]


@router.get("/total-expected", response_model=TotalExpectedResponse)
def total_expected(
    store: MemberStore = Depends(get_member_store),
    reports: BillingReportEngine = Depends(get_report_engine),
):
    members = store.find_all()
    return TotalExpectedResponse(
        member_count=len(members),
        total_expected=reports.total_expected(members),
        currency=settings.CURRENCY,
    )


"""
회원 납부 현황 목록 API

- status 미지정 시 전체 회원
- status=PENDING_PAYMENT 는 미납/부분납(연체 제외) 회원을 "Pending" 으로 표시

"""
@router.get("/members", response_model=list[DashboardMemberRow])
def dashboard_members(
    status: MemberPaymentStatus | None = Query(default=None, description="예: OVERDUE_BILLS"),
    store: MemberStore = Depends(get_member_store),
    reports: BillingReportEngine = Depends(get_report_engine),
):
    members = store.find_all()
    if status is not None:
        members = reports.members_with_status(members, status)

    rows = reports.status_rows(members, pending_view=status == MemberPaymentStatus.PENDING_PAYMENT)
    return [_dashboard_row(r) for r in rows]


"""
청구서 상태별 회원 목록 API

- 해당 상태(오늘 기준)의 청구서를 하나라도 가진 회원
- 예: status=PARTIALLY_PAID 는 부분 납부 중인 청구서가 있는 회원

"""
@router.get("/bill-status", response_model=list[DashboardMemberRow])
def members_by_bill_status(
    status: BillingStatus = Query(..., description="예: PARTIALLY_PAID"),
    store: MemberStore = Depends(get_member_store),
    reports: BillingReportEngine = Depends(get_report_engine),
):
    members = reports.members_with_bill_status(store.find_all(), status)
    return [_dashboard_row(r) for r in reports.status_rows(members)]


"""
회원 납부 현황 CSV 다운로드 API

- StreamingResponse 로 한 줄씩 내보냄
- UTF-8 BOM 을 먼저 출력하여 Excel 에서 바로 열 수 있게 처리

"""
@router.get("/export")
def export_status_csv(
    store: MemberStore = Depends(get_member_store),
    reports: BillingReportEngine = Depends(get_report_engine),
):
    rows = reports.status_rows(store.find_all())

    def generate():
        yield "\ufeff"

        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(EXPORT_HEADER)
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)

        for r in rows:
            writer.writerow(_export_row(r))
            yield output.getvalue()
            output.seek(0)
            output.truncate(0)

    headers = {"Content-Disposition": 'attachment; filename="member_payment_status.csv"'}
    return StreamingResponse(generate(), media_type="text/csv; charset=utf-8", headers=headers)


@router.get("/export.xlsx")
def export_status_xlsx(
    store: MemberStore = Depends(get_member_store),
    reports: BillingReportEngine = Depends(get_report_engine),
):
    members = store.find_all()
    rows = reports.status_rows(members)

    wb = Workbook()
    ws = wb.active
    ws.title = "payment_status"

    ws.append(EXPORT_HEADER)
    for r in rows:
        ws.append(_export_row(r))

    # 마지막 줄: 예상 연회비 합계
    ws.append([])
    ws.append(["total_expected", reports.total_expected(members), settings.CURRENCY])

    buf = io.BytesIO()
    wb.save(buf)

    headers = {"Content-Disposition": 'attachment; filename="member_payment_status.xlsx"'}
    return Response(
        content=buf.getvalue(),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers=headers,
    )
