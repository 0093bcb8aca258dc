# Prompt templates for every content kind.
# Rendering is plain string substitution: same payload in, same text out.

from __future__ import annotations
import re
from typing import Union

from .types import (
    CastContentRequest,
    ChatRequest,
    ContentKind,
    ErrorKind,
    ErrorResult,
    Message,
    Prompt,
    SmsRequest,
)

CHAT_SYSTEM_PROMPT = """\
あなたはメンズエステの顧客対応スタッフです。以下の情報を基に、親切で丁寧に対応してください：

【対応方針】
- 親しみやすく、でも礼儀正しい対応を心がける
- お客様の質問には具体的に答える
- 予約や料金については正確な情報を提供する
- 分からないことは正直に伝え、スタッフに確認することを提案する

【基本情報】
- 営業時間：10:00-24:00（年中無休）
- 料金：コースにより異なります。詳しくは料金ページをご覧ください
- 予約：電話またはオンライン予約が可能です

【よくある質問】
- 初めての方も歓迎です
- 完全個室でプライバシーは守られます
- 清潔な環境を徹底しています
- 経験豊富なセラピストが対応します

お客様が快適に過ごせるよう、丁寧にサポートしてください。"""

CAST_SYSTEM_PROMPTS = {
    ContentKind.PROFILE: (
        "あなたはメンズエステのキャストプロフィールを作成する専門のライターです。"
        "魅力的で親しみやすく、お客様が興味を持つようなプロフィールを日本語で作成してください。"
    ),
    ContentKind.ANNOUNCEMENT: (
        "あなたはメンズエステのお知らせ文章を作成する専門のライターです。"
        "お客様に分かりやすく、魅力的なお知らせ文を日本語で作成してください。"
    ),
    ContentKind.CATCHPHRASE: (
        "あなたはメンズエステのキャッチコピーを作成する専門のコピーライターです。"
        "短く印象的で、お客様の興味を引くキャッチコピーを日本語で作成してください。"
    ),
}

CAST_HEADER = "キャスト名: {cast_name}\nタイプ: {cast_type}\n\n"

CAST_USER_TEMPLATES = {
    ContentKind.PROFILE: CAST_HEADER + "上記の情報を元に、200-300文字程度の魅力的なプロフィールを作成してください。",
    ContentKind.ANNOUNCEMENT: CAST_HEADER + "上記のキャストに関する新着情報やお知らせの文章を100-150文字程度で作成してください。",
    ContentKind.CATCHPHRASE: CAST_HEADER + "上記のキャストの魅力を表現する、20-40文字程度の印象的なキャッチコピーを作成してください。",
}

EXISTING_PROFILE_TEMPLATE = "既存のプロフィール: {existing_profile}\n\n既存の内容を参考にしつつ、より魅力的に改善してください。"

SMS_SYSTEM_PROMPT = """\
あなたはメンズエステサロンのスタッフです。予約確認のSMSメッセージを作成してください。
以下の条件を守ってください：
- 丁寧で親しみやすい文体
- 160文字以内で簡潔に
- 予約日時、コース、セラピスト名を含める
- 店舗名を含める
- 変更やキャンセルの連絡先を案内"""

SMS_USER_TEMPLATE = """\
以下の予約情報でSMSメッセージを作成してください：
お客様名: {customer_name}様
予約日: {reservation_date}
時間: {start_time}
コース: {course_name} ({duration}分)
担当セラピスト: {cast_name}
店舗名: {shop_name}

SMSメッセージのみを出力してください。"""

DEFAULT_SHOP_NAME = "当店"

INVALID_CONTENT_TYPE = "Invalid content type"

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def _render(template: str, **values: str) -> str:
    # single pass, so braces inside user values are never re-expanded
    return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def build_chat_prompt(req: ChatRequest) -> Prompt:
    messages = [Message(role="system", content=CHAT_SYSTEM_PROMPT), *req.messages]
    return Prompt(kind=ContentKind.CHAT, messages=messages, stream=True)


def build_cast_prompt(req: CastContentRequest) -> Union[Prompt, ErrorResult]:
    try:
        kind = ContentKind(req.type)
    except ValueError:
        return ErrorResult(kind=ErrorKind.VALIDATION, message=INVALID_CONTENT_TYPE)
    if kind not in CAST_SYSTEM_PROMPTS:
        return ErrorResult(kind=ErrorKind.VALIDATION, message=INVALID_CONTENT_TYPE)

    user = _render(CAST_USER_TEMPLATES[kind], cast_name=req.cast_name, cast_type=req.cast_type)
    if kind is ContentKind.PROFILE and req.existing_profile:
        user += _render(EXISTING_PROFILE_TEMPLATE, existing_profile=req.existing_profile)

    return Prompt(
        kind=kind,
        messages=[
            Message(role="system", content=CAST_SYSTEM_PROMPTS[kind]),
            Message(role="user", content=user),
        ],
    )


def build_sms_prompt(req: SmsRequest) -> Prompt:
    user = _render(
        SMS_USER_TEMPLATE,
        customer_name=req.customer_name,
        reservation_date=req.reservation_date,
        start_time=req.start_time,
        course_name=req.course_name,
        duration=req.duration,
        cast_name=req.cast_name,
        shop_name=req.shop_name or DEFAULT_SHOP_NAME,
    )
    return Prompt(
        kind=ContentKind.SMS,
        messages=[
            Message(role="system", content=SMS_SYSTEM_PROMPT),
            Message(role="user", content=user),
        ],
    )
