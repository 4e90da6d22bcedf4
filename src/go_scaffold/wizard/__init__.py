"""
go-scaffold Interactive Wizard

Keyboard-driven wizard that collects a project spec and hands it to the
generator. Entry points live in go_scaffold.wizard.orchestrator
(WizardOrchestrator) and go_scaffold.wizard.controller (WizardController).
"""
