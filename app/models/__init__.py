# Settings
from app.models.settings.system_setting_models import SystemSetting

# Workflow
from app.models.workflow.quote_models import Quote
from app.models.workflow.status_transition_models import StatusTransition
from app.models.workflow.notification_models import NotificationOutbox

# Support
from app.models.support.activity_models import WorkflowActivity
