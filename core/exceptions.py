"""
自定義異常類別

集中管理所有業務邏輯異常，方便 API 層統一處理

分類（API 層依分類決定 HTTP status）：
- NotFound: 找不到設定、分類、選手（404）
- InvalidReference: 選手指向不存在的分類（400）
- Conflict: 分類名稱重複（409）
- ValidationError: 欄位缺漏、CSV 格式錯誤、非法的顯示模式（400）
- StorageError: 資料庫本身失敗（500）
"""


class DisplayControllerException(Exception):
    """所有業務異常的基類"""
    pass


class NotFound(DisplayControllerException):
    pass


class InvalidReference(DisplayControllerException):
    pass


class Conflict(DisplayControllerException):
    pass


class ValidationError(DisplayControllerException):
    pass


class StorageError(DisplayControllerException):
    """底層資料庫失敗（包含 constraint violation）"""
    pass


# ============ Setting 相關異常 ============

class SettingNotFound(NotFound):
    """設定值尚未初始化"""
    def __init__(self, key):
        self.key = key
        super().__init__(f"Setting {key} not found")


class InvalidSettingKey(ValidationError):
    """不在固定清單內的設定 key"""
    def __init__(self, key):
        self.key = key
        super().__init__(f"Invalid setting key: {key}")


# ============ Category 相關異常 ============

class CategoryNotFound(NotFound):
    """分類不存在"""
    def __init__(self, category_id):
        self.category_id = category_id
        super().__init__(f"Category {category_id} not found")


class DuplicateCategoryName(Conflict):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Category name already exists: {name}")


# ============ Performer 相關異常 ============

class PerformerNotFound(NotFound):
    """選手不存在"""
    def __init__(self, performer_id):
        self.performer_id = performer_id
        super().__init__(f"Performer {performer_id} not found")


class InvalidCategory(InvalidReference):
    """新增或修改選手時，category_id 指向不存在的分類"""
    def __init__(self, category_id):
        self.category_id = category_id
        super().__init__(f"Category {category_id} does not exist")


class MissingField(ValidationError):
    pass


class InvalidCsv(ValidationError):
    """CSV 無法解析或缺少必要欄位"""
    pass


# ============ Display 相關異常 ============

class NoNextPerformer(NotFound):
    """目前選手已經是分類內最後一位（不會繞回第一位）"""
    def __init__(self, category_id):
        self.category_id = category_id
        super().__init__(f"No next performer found in category {category_id}")


class NoPerformersInCategory(NotFound):
    def __init__(self, category_id):
        self.category_id = category_id
        super().__init__(f"No performers found in category {category_id}")


class PerformerNotInCategory(NotFound):
    """顯示指標的選手與分類對不起來"""
    def __init__(self, performer_id, category_id):
        self.performer_id = performer_id
        self.category_id = category_id
        super().__init__(f"Performer {performer_id} not found in category {category_id}")


class InvalidDisplayType(ValidationError):
    def __init__(self, display_type):
        self.display_type = display_type
        super().__init__(
            f'Invalid display type {display_type!r}. Must be either "performer" or "title"'
        )
