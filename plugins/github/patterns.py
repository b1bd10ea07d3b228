"""GitHub 仓库链接识别"""

import re
from typing import Optional

from .models import RepositoryRef

# 仓库名止于字符串结尾或任意非单词字符，因此只取前两段路径，
# 结尾的 "." 或 ")" 不会被算进仓库名
GITHUB_URL = re.compile(
    r"github\.com/([a-zA-Z0-9_\-]+)/([a-zA-Z0-9_\-]+)(?:$|\W)",
    re.ASCII,
)


def extract_repository(text: str) -> Optional[RepositoryRef]:
    """
    提取消息中第一个 GitHub 仓库链接

    :param text: 消息文本
    :return: 仓库标识，未匹配时为 None
    """
    match = GITHUB_URL.search(text)
    if not match:
        return None
    return RepositoryRef(match.group(1), match.group(2))
