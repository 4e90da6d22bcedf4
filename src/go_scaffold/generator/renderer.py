"""
Generated Go sources

Renders cmd/server/main.go and internal/app/routes.go from inline Jinja2
templates. Both branch on one set of boolean feature flags.
"""

from pathlib import Path
from typing import Any, Dict, Iterable

from jinja2 import Environment, StrictUndefined

from go_scaffold.wizard.features import (
    API_DOCS,
    AUTH,
    DATABASE,
    DOCKER,
    FILE_STORAGE,
    USER_MANAGEMENT,
)


MAIN_GO_PATH = Path("cmd") / "server" / "main.go"
ROUTES_GO_PATH = Path("internal") / "app" / "routes.go"


MAIN_GO_TEMPLATE = """package main

import (
{% if has_docs %}	_ "{{ module }}/docs" // Important: import the generated docs
{% endif %}	bootstrap "{{ module }}/internal/app"
	"{{ module }}/internal/platform/config"
	"{{ module }}/internal/platform/logger"

	"github.com/gin-gonic/gin"
)

// @title           Go Platform Template API
// @version         1.0
// @description     Go Platform Template - Production-ready Go API platform
// @termsOfService  http://swagger.io/terms/

// @contact.name   API Support
// @contact.email  support@example.com

// @license.name  MIT
// @license.url   https://opensource.org/licenses/MIT

// @host      localhost:8080
// @BasePath  /api/v1

// @securityDefinitions.apikey BearerAuth
// @in header
// @name Authorization
// @description Type "Bearer" followed by a space and JWT token.
func main() {
	// Load config
	cfg := config.LoadConfig()

	// Init logger
	logr := logger.InitLogger()
	defer func() { _ = logr.Logger.Sync() }()
	logr.Sugar.Infof("Starting server on %s", cfg.ServerAddr)

{% if has_database %}	// Init DB
	db := bootstrap.InitDB(cfg, logr.Sugar)
{% endif %}
	// Init Gin
	r := gin.New()
	bootstrap.SetupMiddleware(r, logr.Sugar)

	// Register domain routes
{% if has_database %}	bootstrap.RegisterRoutes(r, db, cfg, logr.Sugar)
{% else %}	// No database features configured
{% endif %}
{% if has_docs %}	// Setup Swagger
	bootstrap.SetupSwagger(r, cfg, logr.Sugar)
{% endif %}
	// Health check
{% if has_database %}	r.GET("/health", bootstrap.HealthCheckHandler(db, logr.Sugar))
{% else %}	r.GET("/health", func(c *gin.Context) {
		c.JSON(200, gin.H{"status": "ok"})
	})
{% endif %}
	// Start server
{% if has_database %}	bootstrap.StartServer(r, cfg.ServerAddr, db, logr.Sugar)
{% else %}	bootstrap.StartServer(r, cfg.ServerAddr, nil, logr.Sugar)
{% endif %}
}
"""


ROUTES_GO_TEMPLATE = """package bootstrap

import (
	"time"

	"{{ module }}/internal/platform/config"
	"{{ module }}/internal/platform/http/middleware"
{% if has_auth %}
	authApi "{{ module }}/internal/domain/auth/api"
	authRepo "{{ module }}/internal/domain/auth/repo"
	authService "{{ module }}/internal/domain/auth/service"
{% endif %}
{% if has_user %}
	userApi "{{ module }}/internal/domain/user/api"
	userRepo "{{ module }}/internal/domain/user/repo"
	userService "{{ module }}/internal/domain/user/service"
{% endif %}
{% if has_file %}
	fileApi "{{ module }}/internal/domain/file/api"
	fileRepo "{{ module }}/internal/domain/file/repo"
	fileService "{{ module }}/internal/domain/file/service"
{% endif %}
	"github.com/gin-gonic/gin"
	"go.uber.org/zap"
	"gorm.io/gorm"
)

func RegisterRoutes(r *gin.Engine, db *gorm.DB, cfg *config.Config, log *zap.SugaredLogger) {
{% if has_auth %}	// -----------------------
	// JWT & Auth setup
	// -----------------------
	jwtManager := authService.NewJWTManager(
		cfg.JWT.SigningKey,
		cfg.JWT.RefreshKey,
		cfg.JWT.AccessExpiresIn,
		cfg.JWT.RefreshExpiresIn,
	)
{% endif %}
{% if has_user %}	uRepo := userRepo.NewUserRepo(db)
	uService := userService.NewUserService(uRepo, log)
	uHandler := userApi.NewUserHandler(uService, log)
{% endif %}
{% if has_auth %}	tRepo := authRepo.NewTokenRepo(db)
	tStore := authService.NewTokenStore(tRepo, log)
	aService := authService.NewAuthService(uRepo, jwtManager, tStore, log)
	aHandler := authApi.NewAuthHandler(aService, log)

	// Start background job to clean up expired tokens every 24 hours
	go authService.StartTokenCleanupJob(tStore, 24*time.Hour)
{% endif %}
{% if has_file %}	fRepo := fileRepo.NewFileRepo(db)
	var fileHandler *fileApi.FileHandler
	fSvc, err := fileService.NewFileService(fRepo, cfg, log)
	if err != nil {
		log.Warnf("FileService initialization failed (MinIO unavailable): %v", err)
		log.Warn("File upload/download endpoints will be unavailable")
	} else {
		fileHandler = fileApi.NewFileHandler(fSvc, log)
	}
{% endif %}
	// -----------------------
	// API Versioning: v1
	// -----------------------
	v1 := r.Group("/api/v1")
	{
{% if has_auth %}		// -----------------------
		// Auth routes
		// -----------------------
		auth := v1.Group("/")
		{
			auth.POST("/login", aHandler.Login)
			auth.POST("/refresh", aHandler.Refresh)
			auth.POST("/logout", aHandler.Logout)
		}
{% endif %}
{% if has_user %}		// -----------------------
		// User routes
		// -----------------------
		users := v1.Group("/users")
		{
			users.POST("/", uHandler.Register)
{% if has_auth %}			users.GET("/", middleware.JWTAuth(jwtManager), uHandler.ListUsers)
			users.GET("/:id", middleware.JWTAuth(jwtManager), uHandler.GetUser)
			users.PUT("/:id", middleware.JWTAuth(jwtManager), uHandler.Update)
			users.DELETE("/:id", middleware.JWTAuth(jwtManager), uHandler.Delete)
{% else %}			users.GET("/", uHandler.ListUsers)
			users.GET("/:id", uHandler.GetUser)
			users.PUT("/:id", uHandler.Update)
			users.DELETE("/:id", uHandler.Delete)
{% endif %}		}
{% endif %}
{% if has_auth %}		// -----------------------
		// Protected routes
		// -----------------------
		protected := v1.Group("/")
		protected.Use(middleware.JWTAuth(jwtManager))
		{
			protected.GET("/me", aHandler.Me)
		}
{% endif %}
{% if has_file %}		// -----------------------
		// File routes (only if MinIO available)
		// -----------------------
		if fSvc != nil {
			files := v1.Group("/files")
{% if has_auth %}			files.Use(middleware.JWTAuth(jwtManager))
{% endif %}			{
				files.POST("/upload", fileHandler.Upload)
				files.GET("/:filename", fileHandler.GetFile)
				files.DELETE("/:filename", fileHandler.DeleteFile)
				files.GET("/", fileHandler.GetUserFiles)
			}
		}
{% endif %}	}

	log.Info("Routes registered successfully under /api/v1")
}
"""


_env = Environment(
    keep_trailing_newline=True,
    undefined=StrictUndefined,
    autoescape=False,
)


def build_context(module: str, selected_features: Iterable[str]) -> Dict[str, Any]:
    """Flag context shared by both templates."""
    selected = set(selected_features)
    return {
        "module": module,
        "has_auth": AUTH in selected,
        "has_user": USER_MANAGEMENT in selected,
        "has_database": DATABASE in selected,
        "has_file": FILE_STORAGE in selected,
        "has_docs": API_DOCS in selected,
        "has_docker": DOCKER in selected,
    }


def render_main_go(context: Dict[str, Any]) -> str:
    return _env.from_string(MAIN_GO_TEMPLATE).render(**context)


def render_routes_go(context: Dict[str, Any]) -> str:
    return _env.from_string(ROUTES_GO_TEMPLATE).render(**context)


GENERATED_FILES = {
    MAIN_GO_PATH: render_main_go,
    ROUTES_GO_PATH: render_routes_go,
}


def write_generated_files(project_dir: Path, context: Dict[str, Any], file_mode: int = 0o644):
    """Render both generated files into the project, replacing any copies."""
    for relative_path, render in GENERATED_FILES.items():
        target = project_dir / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render(context))
        target.chmod(file_mode)
