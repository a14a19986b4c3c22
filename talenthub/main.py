"""TalentHub 应用入口"""

import asyncio
import argparse
import json
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Annotated, Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, Header, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .core import (
    AuthError, SchemaViolationError, Session, UpstreamError, ValidationError,
    analyze_appraisal_feedback, analyze_skill_gaps, get_wellbeing_suggestion, rate_resume,
    close_session_manager, get_session_manager, init_session_manager,
)
from .integrations.gemini_api import close_gemini_api
from .models.talent import TalentSearchParams
from .models.user import Credentials, UserRole
from .services import get_talent_service, is_tool_allowed, navigation_for
from .services.navigation import APPRAISAL, RESUME_SCREENING, SKILL_GAP_ANALYSIS, TALENT_SOURCING, WELLNESS, Tool
from .utils.config import get_config
from .utils.helpers import load_document
from .utils.logger import app_logger

config = get_config()

GENERIC_FAILURE_MESSAGE = "There was a problem processing your request. Please try again."


@asynccontextmanager
async def lifespan(app: FastAPI):
    """启动/关闭生命周期"""
    init_session_manager()
    app_logger.info(f"{config.app.name} {config.app.version} 启动")
    yield
    await close_session_manager()
    await close_gemini_api()
    app_logger.info(f"{config.app.name} 已关闭")


app = FastAPI(
    title="TalentHub",
    description="Role-based recruiting assistant: resume scoring, skill-gap analysis, wellbeing, talent search and appraisal analysis",
    version=config.app.version,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== 请求模型 ====================

class RoleUpdateRequest(BaseModel):
    """切换角色请求"""
    role: UserRole


# ==================== 会话依赖 ====================

def get_current_session(authorization: Optional[str] = Header(None)) -> Session:
    """从 ``Authorization: Bearer <session_id>`` 解析当前会话"""
    session_id = authorization.removeprefix("Bearer ").strip() if authorization else None
    session = get_session_manager().get(session_id)
    if session is None or not session.is_authenticated:
        raise HTTPException(status_code=401, detail="Not signed in.")
    return session


def require_tool(tool: Tool):
    """限制只有对应角色才能使用该功能"""
    def dependency(session: Session = Depends(get_current_session)) -> Session:
        if not is_tool_allowed(session.role, tool):
            raise HTTPException(
                status_code=403,
                detail=f"{tool.label} is not available for the {session.role.value} role."
            )
        return session
    return dependency


# ==================== 基础API ====================

@app.get("/")
async def root():
    """根路径"""
    return {
        "message": config.app.name,
        "version": config.app.version,
        "status": "running",
        "timestamp": datetime.now().isoformat()
    }


@app.get("/health")
async def health_check():
    """健康检查"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "components": {
            "model_service": "configured" if config.gemini.api_key else "missing api key",
            "identity_provider": "configured" if config.firebase.api_key else "missing api key",
        }
    }


# ==================== 认证API ====================

@app.post("/auth/login")
async def login(credentials: Credentials):
    """登录"""
    session = await get_session_manager().sign_in(credentials)
    return session.to_dict()


@app.post("/auth/signup")
async def signup(credentials: Credentials):
    """注册"""
    session = await get_session_manager().sign_up(credentials)
    return session.to_dict()


@app.post("/auth/logout")
async def logout(session: Session = Depends(get_current_session)):
    """退出登录"""
    await get_session_manager().sign_out(session.session_id)
    return {"message": "Signed out."}


@app.get("/auth/session")
async def current_session(session: Session = Depends(get_current_session)):
    """当前会话信息"""
    return session.to_dict()


@app.put("/auth/role")
async def switch_role(request: RoleUpdateRequest, session: Session = Depends(get_current_session)):
    """切换角色"""
    session = await get_session_manager().set_role(session.session_id, request.role)
    return session.to_dict()


@app.get("/api/navigation")
async def navigation(session: Session = Depends(get_current_session)):
    """当前角色可用的功能"""
    return {
        "role": session.role.value,
        "tools": [{"key": tool.key, "label": tool.label, "path": tool.path} for tool in navigation_for(session.role)]
    }


# ==================== 求职者功能 ====================

@app.post("/api/resume-rating")
async def resume_rating(payload: Dict[str, Any] = Body(...), session: Session = Depends(require_tool(RESUME_SCREENING))):
    """简历评分"""
    result = await rate_resume(payload)
    return result.model_dump(by_alias=True)


@app.post("/api/skill-gap")
async def skill_gap(payload: Dict[str, Any] = Body(...), session: Session = Depends(require_tool(SKILL_GAP_ANALYSIS))):
    """技能差距分析"""
    result = await analyze_skill_gaps(payload)
    return result.model_dump(by_alias=True)


@app.post("/api/wellbeing")
async def wellbeing(payload: Dict[str, Any] = Body(...), session: Session = Depends(require_tool(WELLNESS))):
    """身心健康建议"""
    result = await get_wellbeing_suggestion(payload)
    return result.model_dump(by_alias=True)


# ==================== 招聘者功能 ====================

@app.post("/api/appraisal")
async def appraisal(payload: Dict[str, Any] = Body(...), session: Session = Depends(require_tool(APPRAISAL))):
    """绩效反馈分析"""
    result = await analyze_appraisal_feedback(payload)
    return result.model_dump(by_alias=True)


@app.get("/api/talent")
async def search_talent(params: Annotated[TalentSearchParams, Query()], session: Session = Depends(require_tool(TALENT_SOURCING))):
    """搜索人才"""
    candidates = get_talent_service().search(params)
    return {"candidates": [candidate.model_dump() for candidate in candidates], "total": len(candidates)}


@app.get("/api/talent/roles")
async def talent_roles(session: Session = Depends(require_tool(TALENT_SOURCING))):
    """人才库职位列表"""
    return {"roles": get_talent_service().roles()}


# ==================== 异常处理 ====================

@app.exception_handler(ValidationError)
async def validation_exception_handler(request, exc: ValidationError):
    """输入校验失败，返回全部字段错误"""
    return JSONResponse(
        status_code=422,
        content={
            "detail": str(exc),
            "errors": exc.as_dict(),
            "violations": [{"field": v.field, "kind": v.kind, "message": v.message} for v in exc.violations],
        }
    )


@app.exception_handler(UpstreamError)
@app.exception_handler(SchemaViolationError)
async def model_failure_handler(request, exc: Exception):
    """模型调用失败，只返回通用提示"""
    app_logger.error(f"模型调用失败 {request.url.path}: {type(exc).__name__}: {str(exc)}")
    return JSONResponse(status_code=502, content={"detail": GENERIC_FAILURE_MESSAGE})


@app.exception_handler(AuthError)
async def auth_exception_handler(request, exc: AuthError):
    """认证失败"""
    return JSONResponse(status_code=401, content={"detail": str(exc), "code": exc.code})


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """全局异常处理"""
    app_logger.error(f"未处理的异常: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "timestamp": datetime.now().isoformat()}
    )


# ==================== 命令行接口 ====================

async def _run_cli_flow(flow, payload: Dict[str, Any]):
    try:
        result = await flow(payload)
        print(json.dumps(result.model_dump(by_alias=True), ensure_ascii=False, indent=2))
    except ValidationError as e:
        print("输入校验失败:")
        for violation in e.violations:
            print(f"  - {violation.field}: {violation.message}")
    except (UpstreamError, SchemaViolationError) as e:
        print(f"分析失败: {str(e)}")
    finally:
        await close_gemini_api()


def main():
    """主函数"""
    parser = argparse.ArgumentParser(description="TalentHub 招聘助手")
    subparsers = parser.add_subparsers(dest="command", help="可用命令")

    server_parser = subparsers.add_parser("server", help="启动API服务器")
    server_parser.add_argument("--host", default="0.0.0.0", help="服务器地址")
    server_parser.add_argument("--port", type=int, default=8000, help="服务器端口")
    server_parser.add_argument("--reload", action="store_true", help="开发模式")

    rating_parser = subparsers.add_parser("rate-resume", help="简历评分")
    rating_parser.add_argument("resume", help="简历文件(.pdf/.docx)")
    rating_parser.add_argument("--job-field", required=True, help="目标职业领域")
    rating_parser.add_argument("--experience", required=True, help="工作经历描述(至少50个字符)")
    rating_parser.add_argument("--certificate", action="append", default=[], help="证书文件，可重复")

    skill_parser = subparsers.add_parser("skill-gap", help="技能差距分析")
    skill_parser.add_argument("resume", help="简历文件(.pdf/.docx)")
    skill_parser.add_argument("--role", required=True, help="目标职位")

    appraisal_parser = subparsers.add_parser("appraisal", help="绩效反馈分析")
    appraisal_parser.add_argument("--name", required=True, help="员工姓名")
    appraisal_parser.add_argument("--title", required=True, help="职位名称")
    appraisal_parser.add_argument("--feedback", required=True, help="反馈内容(50-5000个字符)")

    wellbeing_parser = subparsers.add_parser("wellbeing", help="身心健康建议")
    wellbeing_parser.add_argument("--mood", required=True, help="当前心情")
    wellbeing_parser.add_argument("--activities", help="最近的活动")

    args = parser.parse_args()

    if args.command == "server":
        import uvicorn
        uvicorn.run(
            "talenthub.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload
        )
    elif args.command == "rate-resume":
        asyncio.run(_run_cli_flow(rate_resume, {
            "job_field": args.job_field,
            "resume": load_document(args.resume),
            "certificates": [load_document(path) for path in args.certificate],
            "work_experience": args.experience,
        }))
    elif args.command == "skill-gap":
        asyncio.run(_run_cli_flow(analyze_skill_gaps, {
            "resume": load_document(args.resume),
            "target_role": args.role,
        }))
    elif args.command == "appraisal":
        asyncio.run(_run_cli_flow(analyze_appraisal_feedback, {
            "employee_name": args.name,
            "job_title": args.title,
            "feedback_text": args.feedback,
        }))
    elif args.command == "wellbeing":
        asyncio.run(_run_cli_flow(get_wellbeing_suggestion, {
            "mood": args.mood,
            "recent_activities": args.activities,
        }))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
