from nyaya_lite.api.routes.analysis import analysis_bp
from nyaya_lite.api.routes.laws import laws_bp
from nyaya_lite.api.routes.lawyers import lawyers_bp
from nyaya_lite.api.routes.monitoring import monitoring_bp

__all__ = ['analysis_bp', 'laws_bp', 'lawyers_bp', 'monitoring_bp']
