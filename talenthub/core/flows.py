"""AI 流程：每个能力绑定请求模型、响应模型与提示词模板"""

import json
import time
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import SchemaViolationError
from .prompt_template import PromptTemplate
from .validation import validate_payload, violations_from
from ..integrations.gemini_api import GeminiAPI, get_gemini_api
from ..models.resume_rating import ResumeRatingRequest, ResumeRatingResult
from ..models.skill_gap import SkillGapRequest, SkillGapResult
from ..models.appraisal import AppraisalFeedbackRequest, AppraisalFeedbackResult
from ..models.wellbeing import WellbeingRequest, WellbeingResult
from ..utils.helpers import extract_json_object, truncate_text
from ..utils.logger import ai_logger

Req = TypeVar("Req", bound=BaseModel)
Res = TypeVar("Res", bound=BaseModel)

ApiFactory = Callable[[], Awaitable[GeminiAPI]]


class Flow(Generic[Req, Res]):
    """单次请求/响应流程

    校验输入 -> 渲染提示词 -> 调用模型一次 -> 解析并校验输出。
    不重试、不降级，错误原样抛给调用方。
    """

    def __init__(self, name: str, request_model: Type[Req], response_model: Type[Res],
                 template: PromptTemplate, api_factory: ApiFactory = get_gemini_api):
        self.name = name
        self.request_model = request_model
        self.response_model = response_model
        self.template = template
        self.api_factory = api_factory
        self.output_schema = response_model.model_json_schema(by_alias=True)

    def prompt_values(self, request: Req) -> Dict[str, Any]:
        """模板字段取值，文档字段保留为 Document 对象"""
        return {name: getattr(request, name) for name in type(request).model_fields}

    def parse_output(self, raw_output: str) -> Res:
        """解析模型输出并按响应模型校验

        Raises:
            SchemaViolationError: 输出不是 JSON 对象或不满足响应模型约束
        """
        try:
            data = extract_json_object(raw_output)
        except ValueError as e:
            ai_logger.error(f"[{self.name}] 模型输出无法解析为JSON: {str(e)}")
            ai_logger.debug(f"[{self.name}] 原始内容: {truncate_text(raw_output, 500)}")
            raise SchemaViolationError(f"{self.name}: model output is not a JSON object", raw_output) from e

        try:
            # 严格模式：不做字符串转数字、布尔转数字等隐式转换
            return self.response_model.model_validate_json(json.dumps(data), strict=True)
        except PydanticValidationError as e:
            violations = violations_from(e)
            ai_logger.error(f"[{self.name}] 模型输出违反响应结构: {[v.field for v in violations]}")
            raise SchemaViolationError(
                f"{self.name}: model output violates {self.response_model.__name__}",
                raw_output,
                violations,
            ) from e

    def check_result(self, result: Res) -> None:
        """结果后置检查，子类可覆盖"""
        pass

    async def run(self, request: Any, api: Optional[GeminiAPI] = None) -> Res:
        """执行流程

        ``request`` 可以是已校验的请求模型，也可以是未类型化的字典。
        """
        request = validate_payload(self.request_model, request)
        prompt = self.template.render(self.prompt_values(request))

        if api is None:
            api = await self.api_factory()

        ai_logger.info(f"开始执行流程: {self.name} (文档数: {len(prompt.media)})")
        start_time = time.monotonic()

        raw_output = await api.generate_json(prompt.parts, self.output_schema)
        result = self.parse_output(raw_output)
        self.check_result(result)

        ai_logger.info(f"流程完成: {self.name} - 耗时: {time.monotonic() - start_time:.2f}秒")

        return result

    def __repr__(self) -> str:
        return f"Flow(name={self.name!r}, request={self.request_model.__name__}, response={self.response_model.__name__})"


class SkillGapFlow(Flow[SkillGapRequest, SkillGapResult]):
    """技能差距分析流程，技能/建议数量只做提示性检查"""

    def check_result(self, result: SkillGapResult) -> None:
        for warning in result.advisory_warnings():
            ai_logger.warning(f"[{self.name}] {warning}")


RESUME_RATING_PROMPT = PromptTemplate.parse("resumeRatingPrompt", """You are an expert technical recruiter. Your task is to rate how well an applicant's profile fits their preferred job field.

Review the resume, the described work experience and any certificates provided, and compare them against the typical requirements of the job field.

1.  **Score:** Provide a score between 0 and 100 indicating how well the profile matches the job field.
2.  **Comments (aiComments):** Explain the score in a short paragraph and point out the most valuable improvements the applicant could make.

Job Field: {{job_field}}

Work Experience:
{{work_experience}}

Resume: {{media resume}}
{{#if certificates}}
Certificates: {{media certificates}}
{{/if}}""")


SKILL_GAP_PROMPT = PromptTemplate.parse("skillGapAnalysisPrompt", """You are an expert HR analyst. Your task is to perform a skill gap analysis based on a user's resume and their target job role.

Analyze the resume provided and compare the user's skills against the typical requirements for the specified target role.

1.  **Analysis (for Radar Chart):** Identify 5-7 key skills relevant to the role. For each skill, provide an estimated score for the user's current level ('your') and the level required for the role ('required'). Scores must be between 0 and 100.
2.  **Recommendations:** Based on the most significant gaps, provide 2-3 specific, actionable recommendations for the user to improve their skills.
3.  **Score:** Provide an overall score (0-100) indicating how well the resume matches the target role.

Target Role: {{target_role}}
Resume: {{media resume}}""")


APPRAISAL_PROMPT = PromptTemplate.parse("appraisalFeedbackPrompt", """You are an experienced HR business partner. Analyze the performance feedback written about an employee and turn it into insights a manager can act on.

Employee: {{employee_name}}
Job Title: {{job_title}}

Feedback:
{{feedback_text}}

Provide:
1.  **Summary:** A concise summary of the feedback.
2.  **Key Insights (keyInsights):** The main strengths and areas for improvement, with reference to the expectations of the job title.
3.  **Recommendations:** Specific, actionable recommendations for the employee's development.""")


WELLBEING_PROMPT = PromptTemplate.parse("wellbeingSuggestionPrompt", """You are a well-being assistant. You are to provide personalized suggestions for improving well-being based on the user's mood.

Mood: {{mood}}
{{#if recent_activities}}
Recent activities: {{recent_activities}}
{{/if}}
Suggestion:""")


resume_rating_flow = Flow(
    "rateResumeFlow", ResumeRatingRequest, ResumeRatingResult, RESUME_RATING_PROMPT
)
skill_gap_flow = SkillGapFlow(
    "skillGapAnalysisFlow", SkillGapRequest, SkillGapResult, SKILL_GAP_PROMPT
)
appraisal_feedback_flow = Flow(
    "appraisalFeedbackFlow", AppraisalFeedbackRequest, AppraisalFeedbackResult, APPRAISAL_PROMPT
)
wellbeing_flow = Flow(
    "wellbeingSuggestionFlow", WellbeingRequest, WellbeingResult, WELLBEING_PROMPT
)


async def rate_resume(request: Any, api: Optional[GeminiAPI] = None) -> ResumeRatingResult:
    """简历评分"""
    return await resume_rating_flow.run(request, api=api)


async def analyze_skill_gaps(request: Any, api: Optional[GeminiAPI] = None) -> SkillGapResult:
    """技能差距分析"""
    return await skill_gap_flow.run(request, api=api)


async def analyze_appraisal_feedback(request: Any, api: Optional[GeminiAPI] = None) -> AppraisalFeedbackResult:
    """绩效反馈分析"""
    return await appraisal_feedback_flow.run(request, api=api)


async def get_wellbeing_suggestion(request: Any, api: Optional[GeminiAPI] = None) -> WellbeingResult:
    """身心健康建议"""
    return await wellbeing_flow.run(request, api=api)
