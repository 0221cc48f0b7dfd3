# 控制台提示文案
LABELS: dict[str, str] = {
    "addSuccLabel": "添加成功",
    "updateSuccLabel": "更新成功",
    "removeSuccLabel": "删除成功",
    "duplicatedCategoryURILabel": "该 URI 已被其他分类使用",
    "categoryNotFoundLabel": "分类不存在",
    "invalidDirectionLabel": "排序方向只能是 up 或 down",
    "categoryOrderExhaustedLabel": "分类序号已达上限，请手动指定排序",
    "badRequestLabel": "请求格式错误",
    "systemErrLabel": "系统错误，请稍后重试",
}


def get_label(key: str) -> str:
    return LABELS.get(key, key)
