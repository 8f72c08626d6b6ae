"""Shared fixtures for umlscope tests."""

import os
from pathlib import Path
from textwrap import dedent

import pytest

# Keep test runs from writing to ~/.umlscope/logs
os.environ.setdefault("UMLSCOPE_LOG_TO_FILE", "0")

from umlscope.models import CodeEntity, MethodEntity, Relative, RelationshipType  # noqa: E402


PROJECT_SOURCES = {
    "com/app/web/OrderController.java": """
        package com.app.web;

        import com.app.service.OrderService;

        public class OrderController {
            private OrderService service;

            public void create(String id) {
                service.place(id);
            }
        }
    """,
    "com/app/service/OrderService.java": """
        package com.app.service;

        import com.app.repo.OrderRepository;

        public class OrderService {
            private OrderRepository repository;

            public void place(String id) {
                repository.save(id);
            }
        }
    """,
    "com/app/repo/OrderRepository.java": """
        package com.app.repo;

        public class OrderRepository {
            public void save(String id) {
                System.out.println(id);
            }
        }
    """,
}


def write_sources(root: Path, sources: dict[str, str]) -> Path:
    for relative_path, code in sources.items():
        file_path = root / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(dedent(code).strip() + "\n", encoding="utf-8")
    return root


@pytest.fixture
def java_project(tmp_path):
    """A three-layer Java project: controller -> service -> repository."""
    return write_sources(tmp_path / "src", PROJECT_SOURCES)


def make_entity(name: str, methods=(), calls=()) -> CodeEntity:
    """Entity with void methods and CALLER_CALLEE relatives.

    ``calls`` holds (caller_method, target, callee_method) triples.
    """
    entity = CodeEntity(name)
    for method in methods:
        entity.add_method(MethodEntity(method))
    for caller_method, target, callee_method in calls:
        entity.add_relative(
            Relative(
                RelationshipType.CALLER_CALLEE,
                target,
                caller_method=caller_method,
                callee_method=callee_method,
            )
        )
    return entity
