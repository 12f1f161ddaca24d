"""Global test configuration for goimpl tests."""

from pathlib import Path

import pytest

GO_PROJECT = {
    "go.mod": "module example.com/shop\n\ngo 1.21\n",
    "internal/app/app.go": """package app

type App interface {
	Start() error
	Stop() error
	GetName() string
}
""",
    "pkg/api/server.go": """package api

import "net/http"

type Server struct {
	mux *http.ServeMux
}

func (s *Server) Start() error    { return nil }
func (s *Server) Stop() error     { return nil }
func (s *Server) GetName() string { return "api" }
""",
    "pkg/jobs/worker.go": """package jobs

type Worker struct{}

func (w *Worker) Process() error { return nil }
""",
    "pkg/jobs/queue/queue.go": """package queue

type Queue struct{}

func (q Queue) Start() error    { return nil }
func (q Queue) Stop() error     { return nil }
func (q Queue) GetName() string { return "queue" }
""",
    "vendor/lib/lib.go": """package lib

type Vendored struct{}

func (v *Vendored) Start() error    { return nil }
func (v *Vendored) Stop() error     { return nil }
func (v *Vendored) GetName() string { return "vendored" }
""",
}


@pytest.fixture
def go_project(tmp_path: Path) -> Path:
    """Write a small Go module with three App implementations.

    Implementations in walk order: api.Server, queue.Queue, lib.Vendored.
    """
    for relative, content in GO_PROJECT.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return tmp_path

