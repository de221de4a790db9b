"""
Onboarding Module

The "Become an Artisan" wizard: form state, debounced autosave and the
step controller that ties the draft store, ingestion queue and publisher
together.

Components:
===========
- form.py: DraftForm, the editable snapshot
- autosave.py: AutosaveCoordinator, debounced form persistence
- wizard.py: OnboardingWizard, the 5-step controller
"""

from hestia.onboarding.form import DraftForm
from hestia.onboarding.autosave import AutosaveCoordinator
from hestia.onboarding.wizard import OnboardingWizard, WizardStep, TOTAL_STEPS

__all__ = [
    "DraftForm",
    "AutosaveCoordinator",
    "OnboardingWizard",
    "WizardStep",
    "TOTAL_STEPS",
]
