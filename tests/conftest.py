"""测试配置和共享 Fixtures。"""

import io

import pytest
from PIL import Image

from src.models import Post, Profile
from src.services.llm_service import LLMService


# ============================================================================
# Mock Services
# ============================================================================

class MockLLMService:
    """测试用 Mock LLM 服务。

    可以通过设置 response 属性来控制返回值。
    可以通过设置 should_fail 来模拟失败。
    每次调用的 prompt 和参数记录在 calls 中。
    """

    def __init__(self):
        self.response = "A person who loves hiking, coffee and photography."
        self.should_fail = False
        self.call_count = 0
        self.calls = []

    def call(self, prompt: str, **kwargs) -> str:
        self.call_count += 1
        self.calls.append({"prompt": prompt, **kwargs})

        if self.should_fail:
            raise Exception("Mock LLM failure")

        return self.response

    @property
    def last_call(self) -> dict:
        return self.calls[-1]

    def reset(self):
        """重置状态。"""
        self.call_count = 0
        self.calls = []


@pytest.fixture(autouse=True)
def reset_llm_service():
    """每个测试结束后恢复默认 LLM 服务。"""
    yield
    LLMService.reset()


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def mock_llm() -> MockLLMService:
    """创建 Mock LLM 服务。"""
    return MockLLMService()


@pytest.fixture
def failing_llm(mock_llm: MockLLMService) -> MockLLMService:
    """创建总是失败的 Mock LLM。"""
    mock_llm.should_fail = True
    return mock_llm


@pytest.fixture
def mock_llm_with_recommendations(mock_llm: MockLLMService) -> MockLLMService:
    """创建返回推荐 JSON 的 Mock LLM（带前后说明文字）。"""
    mock_llm.response = '''Here are three ideas:
[
    {
        "name": "Ultralight Trekking Poles",
        "description": "Carbon poles for long trail days",
        "price": "$89.99",
        "match_reason": "Hikes most weekends"
    },
    {
        "name": "Pour-Over Coffee Kit",
        "description": "Portable brewer for camp mornings",
        "price": 45,
        "match_reason": "Coffee shows up in many posts"
    },
    {
        "name": "Lens Cleaning Set",
        "description": "Keeps camera gear spotless",
        "price": "1,200",
        "match_reason": "Shoots landscape photography"
    },
]
Enjoy!'''
    return mock_llm


# ============================================================================
# Profile Fixtures
# ============================================================================

@pytest.fixture
def sample_profile() -> Profile:
    """创建示例 Profile。"""
    return Profile(
        username="trail_runner",
        bio="Coffee lover, trail runner and weekend photographer",
        posts=[
            Post.from_caption(
                "Sunrise summit #Hiking #mountains with @best_friend",
                image_url="https://cdn.example.com/1.jpg",
                likes=120,
            ),
            Post.from_caption(
                "New pour over setup #coffee #hiking",
                image_url="https://cdn.example.com/2.jpg",
                likes=None,
            ),
        ],
    )


@pytest.fixture
def empty_profile() -> Profile:
    """创建没有帖子和简介的 Profile（用于边界测试）。"""
    return Profile(username="quiet_user")


# ============================================================================
# Test Utilities
# ============================================================================

def make_image_bytes(size=(800, 600), color="red", fmt="PNG", mode="RGB") -> bytes:
    """用 Pillow 在内存中生成图片。"""
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """800x600 的 PNG 图片。"""
    return make_image_bytes()
