"""
示例存储 - 按名称保存组装完成的示例

由构建流程显式创建并传递给渲染器，不使用模块级全局状态。
每次扫描开始前调用 begin_pass()，不同构建之间调用 reset()。
"""

from typing import Iterator, Optional

from exemplify.core.errors import DuplicateExampleError
from exemplify.core.models import Example


class ExampleStore:
    """示例存储"""

    def __init__(self) -> None:
        self._examples: dict[str, Example] = {}
        self._written_in: dict[str, int] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        """当前扫描轮次编号"""
        return self._generation

    def begin_pass(self) -> int:
        """开始新的扫描轮次，之后的 put() 可以替换上一轮的同名示例"""
        self._generation += 1
        return self._generation

    def put(self, example: Example) -> None:
        """
        插入或替换示例

        Raises:
            DuplicateExampleError: 同一轮次内重复写入同名示例
        """
        if self._written_in.get(example.name) == self._generation:
            raise DuplicateExampleError(example.name)
        self._examples[example.name] = example
        self._written_in[example.name] = self._generation

    def get(self, name: str) -> Optional[Example]:
        """按名称查找，不存在时返回 None"""
        return self._examples.get(name)

    def all(self) -> Iterator[Example]:
        """遍历调用时刻的快照，每次调用重新开始"""
        snapshot = tuple(self._examples.values())
        return iter(snapshot)

    def names(self) -> list[str]:
        """返回所有示例名称，按写入顺序"""
        return list(self._examples)

    def reset(self) -> None:
        """清空存储，用于两次独立构建之间"""
        self._examples.clear()
        self._written_in.clear()
        self._generation = 0

    def __contains__(self, name: object) -> bool:
        return name in self._examples

    def __len__(self) -> int:
        return len(self._examples)

    def __iter__(self) -> Iterator[Example]:
        return self.all()
