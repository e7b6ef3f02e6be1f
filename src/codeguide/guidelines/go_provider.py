"""Built-in guidelines for Go projects."""

from __future__ import annotations

from codeguide.core.context import RequestContext, ensure_context
from codeguide.guidelines.models import Guideline, GuidelineRule
from codeguide.guidelines.service import GuidelineProvider

PROJECT_TYPE_API = "api"
PROJECT_TYPE_CLI = "cli"
PROJECT_TYPE_LIBRARY = "library"

_COMMON: list[Guideline] = [
    Guideline(
        category="Project Structure",
        rules=[
            GuidelineRule(
                title="Standard Layout",
                description=(
                    "Use standard Go project layout with cmd/, pkg/, and internal/ directories"
                ),
                priority=1,
            ),
            GuidelineRule(
                title="Package Organization",
                description="Organize packages by feature, keeping them focused and cohesive",
                priority=1,
            ),
        ],
        examples=[
            "project/\n"
            "├── cmd/                # Main applications\n"
            "│   └── app/\n"
            "│       └── main.go     # Application entry point\n"
            "├── pkg/                # Public library code\n"
            "│   ├── api/            # API handlers and routes\n"
            "│   ├── core/           # Core types and interfaces\n"
            "│   ├── service/        # Business logic\n"
            "│   └── repo/           # Data access layer",
        ],
    ),
    Guideline(
        category="Code Style",
        rules=[
            GuidelineRule(
                title="Package Names",
                description=(
                    "Use single, lowercase words for package names. "
                    "For multi-word packages, use no underscores or mixedCaps"
                ),
                priority=1,
            ),
            GuidelineRule(
                title="Interface Names",
                description="Use -er suffix for single-method interfaces describing actions",
                priority=2,
            ),
        ],
        examples=[
            "package user // Good\n"
            "package imageutil // Good for multi-word\n"
            "package UserService // Bad - don't use mixed caps",
            "type Reader interface { // Good - single method\n"
            "    Read(p []byte) (n int, err error)\n"
            "}",
        ],
    ),
    Guideline(
        category="Error Handling",
        rules=[
            GuidelineRule(
                title="Error Wrapping",
                description="Wrap errors with context using fmt.Errorf and %w verb",
                priority=1,
            ),
            GuidelineRule(
                title="Custom Errors",
                description="Define custom errors for specific error cases",
                priority=2,
            ),
        ],
        examples=[
            'if err != nil {\n    return fmt.Errorf("validate user: %w", err)\n}',
            'var (\n    ErrNotFound = errors.New("not found")\n'
            '    ErrInvalid  = errors.New("invalid input")\n)',
        ],
    ),
]

_BY_PROJECT_TYPE: dict[str, list[Guideline]] = {
    PROJECT_TYPE_API: [
        Guideline(
            category="API Design",
            rules=[
                GuidelineRule(
                    title="Handler Structure",
                    description="Use consistent handler structure with dependency injection",
                    priority=1,
                ),
                GuidelineRule(
                    title="Error Responses",
                    description=(
                        "Use consistent error response format and appropriate HTTP status codes"
                    ),
                    priority=1,
                ),
            ],
            examples=[
                "type Handler struct {\n    service Service\n}\n\n"
                "func NewHandler(service Service) *Handler {\n"
                "    return &Handler{service: service}\n}",
            ],
        ),
    ],
    PROJECT_TYPE_CLI: [
        Guideline(
            category="CLI Design",
            rules=[
                GuidelineRule(
                    title="Command Structure",
                    description="Use cobra for CLI applications with clear command hierarchy",
                    priority=1,
                ),
                GuidelineRule(
                    title="Flag Handling",
                    description="Use consistent flag naming and provide clear descriptions",
                    priority=2,
                ),
            ],
            examples=[
                'var rootCmd = &cobra.Command{\n    Use:   "app",\n'
                '    Short: "A brief description",\n}',
            ],
        ),
    ],
    PROJECT_TYPE_LIBRARY: [
        Guideline(
            category="Library Design",
            rules=[
                GuidelineRule(
                    title="API Design",
                    description="Design clear, consistent APIs with good documentation",
                    priority=1,
                ),
                GuidelineRule(
                    title="Versioning",
                    description="Follow semantic versioning and maintain backwards compatibility",
                    priority=1,
                ),
            ],
            examples=[
                "// Client handles all library operations\n"
                "type Client struct {\n    config Config\n}",
            ],
        ),
    ],
}


class GoProvider(GuidelineProvider):
    def supports_project_type(self, project_type: str) -> bool:
        return project_type in _BY_PROJECT_TYPE

    def get_guidelines(
        self,
        project_type: str,
        options: dict[str, str] | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> list[Guideline]:
        ensure_context(ctx).raise_if_cancelled()
        guidelines = [g.model_copy(deep=True) for g in _COMMON]
        guidelines.extend(g.model_copy(deep=True) for g in _BY_PROJECT_TYPE.get(project_type, []))
        return guidelines
