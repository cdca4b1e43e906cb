from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    全スキーマの基本クラス
    """

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseSchema):
    """メッセージのみのレスポンス"""

    message: str
