"""Built-in practice catalog.

Questions are derived from the GitHub Well-Architected startup quiz.
Benchmarks and score ranges use the 0-100 scale (a 0-4 answer average of
2.0 corresponds to 50).
"""

from .schema import PracticeCatalog

CATALOG_VERSION = "1.0.0"

ALL_STAGES = ["pre-seed", "seed", "series-a", "series-b"]
SEED_AND_LATER = ["seed", "series-a", "series-b"]
SERIES_A_AND_LATER = ["series-a", "series-b"]


def _options(*texts: str) -> list[dict]:
    return [{"value": i, "text": text} for i, text in enumerate(texts, 1)]


CATEGORIES = [
    {
        "id": "security",
        "title": "Security",
        "description": "Protecting code, secrets and dependencies.",
        "focus_areas": ["Branch protection", "Dependency alerts", "Code scanning"],
    },
    {
        "id": "reliability",
        "title": "Reliability",
        "description": "Catching defects early and shipping predictably.",
        "focus_areas": ["CI/CD", "Automated testing", "Release management"],
    },
    {
        "id": "maintainability",
        "title": "Maintainability",
        "description": "Keeping the codebase understandable and owned.",
        "focus_areas": ["Code ownership", "Documentation", "Branching strategy"],
    },
    {
        "id": "collaboration",
        "title": "Collaboration",
        "description": "How the team reviews, plans and communicates work.",
        "focus_areas": ["Code review", "Planning", "Templates"],
    },
    {
        "id": "velocity",
        "title": "Velocity",
        "description": "How quickly changes move from idea to production.",
        "focus_areas": ["Review automation", "AI assistance", "Small pull requests"],
    },
]

QUESTIONS = [
    # Security
    {
        "id": "branch-protection",
        "category": "security",
        "text": "Are main branches protected from direct pushes?",
        "tooltip_term": "branch protection",
        "weight": 0.35,
        "applicable_stages": ALL_STAGES,
        "options": _options(
            "No protection rules",
            "Basic branch protection",
            "Required reviews enabled",
            "Full protection with status checks",
        ),
        "help_url": "https://docs.github.com/en/repositories/configuring-branches-and-merges-in-your-repository/defining-the-mergeability-of-pull-requests/about-protected-branches",
    },
    {
        "id": "dependabot",
        "category": "security",
        "text": "Do you monitor for vulnerable dependencies using Dependabot?",
        "tooltip_term": "Dependabot",
        "weight": 0.4,
        "applicable_stages": ALL_STAGES,
        "options": _options(
            "Not enabled",
            "Security updates only",
            "Version updates enabled",
            "Fully automated with custom config and auto-merge",
        ),
        "help_url": "https://docs.github.com/en/code-security/dependabot",
    },
    {
        "id": "secret-scanning",
        "category": "security",
        "text": "Are you alerted to exposed API keys and secrets?",
        "tooltip_term": "secret scanning",
        "weight": 0.4,
        "applicable_stages": SEED_AND_LATER,
        "options": _options(
            "Not using secret scanning",
            "Basic alerts enabled",
            "Alerts with manual review",
            "Automated secret revocation configured",
        ),
        "help_url": "https://docs.github.com/en/code-security/secret-scanning",
    },
    {
        "id": "code-scanning",
        "category": "security",
        "text": "Do you run static analysis (CodeQL) in your CI pipeline?",
        "tooltip_term": "CodeQL",
        "weight": 0.4,
        "applicable_stages": SEED_AND_LATER,
        "options": _options(
            "Not running code scanning",
            "Basic scanning occasionally",
            "Integrated scanning with manual review",
            "Fully automated code scanning on every build",
        ),
        "help_url": "https://docs.github.com/en/code-security/code-scanning",
    },
    {
        "id": "security-policy",
        "category": "security",
        "text": "Do your repositories publish a security policy for reporting vulnerabilities?",
        "tooltip_term": "security policy",
        "weight": 0.3,
        "applicable_stages": SERIES_A_AND_LATER,
        "options": _options(
            "No security policy",
            "Policy in some repositories",
            "Policy in all public repositories",
            "Organization-wide policy with triage process",
        ),
        "help_url": "https://docs.github.com/en/code-security/getting-started/adding-a-security-policy-to-your-repository",
    },
    # Reliability
    {
        "id": "ci-practices",
        "category": "reliability",
        "text": "What are your CI practices?",
        "tooltip_term": "continuous integration",
        "weight": 0.35,
        "applicable_stages": ALL_STAGES,
        "options": _options(
            "No CI practices",
            "Basic CI practices (e.g., linting, testing)",
            "Advanced CI practices (e.g., automated builds, deployments)",
            "Custom CI practices with full automation",
        ),
        "help_url": "https://docs.github.com/en/actions/automating-builds-and-tests/about-continuous-integration",
    },
    {
        "id": "deployment-automation",
        "category": "reliability",
        "text": "How automated is your deployment process?",
        "weight": 0.3,
        "applicable_stages": ALL_STAGES,
        "options": _options(
            "Manual deployments",
            "Basic CI pipeline",
            "Automated staging deployments",
            "Full CI/CD with automated production deployments",
        ),
        "help_url": "https://docs.github.com/en/actions/deployment/about-deployments",
    },
    {
        "id": "test-automation",
        "category": "reliability",
        "text": "Are unit tests generated, suggested or enforced by automated tooling?",
        "tooltip_term": "Copilot for testing",
        "weight": 0.3,
        "applicable_stages": SEED_AND_LATER,
        "options": _options(
            "No automated test support",
            "Basic manual tests only",
            "Some tooling-assisted tests",
            "Tooling significantly assists in test creation and coverage gates",
        ),
    },
    {
        "id": "release-management",
        "category": "reliability",
        "text": "How are releases versioned and rolled back?",
        "weight": 0.3,
        "applicable_stages": SERIES_A_AND_LATER,
        "options": _options(
            "Ad-hoc releases",
            "Tagged releases",
            "Release notes with environment protection rules",
            "Automated releases with one-click rollback",
        ),
        "help_url": "https://docs.github.com/en/repositories/releasing-projects-on-github/about-releases",
    },
    # Maintainability
    {
        "id": "codeowners",
        "category": "maintainability",
        "text": "Do you enforce CODEOWNERS for critical directories?",
        "tooltip_term": "CODEOWNERS",
        "weight": 0.35,
        "applicable_stages": ALL_STAGES,
        "options": _options(
            "No CODEOWNERS file",
            "Basic CODEOWNERS setup",
            "CODEOWNERS with team assignments",
            "Full CODEOWNERS with automation",
        ),
        "help_url": "https://docs.github.com/en/repositories/managing-your-repositorys-settings-and-features/customizing-your-repository/about-code-owners",
    },
    {
        "id": "documentation",
        "category": "maintainability",
        "text": "Are repository descriptions and README files consistently updated?",
        "tooltip_term": "README",
        "weight": 0.3,
        "applicable_stages": ALL_STAGES,
        "options": _options(
            "No README files",
            "Minimal README files",
            "README with setup and usage instructions",
            "Comprehensive docs kept current by review",
        ),
        "help_url": "https://docs.github.com/en/repositories/managing-your-repositorys-settings-and-features/customizing-your-repository/about-readmes",
    },
    {
        "id": "branch-strategy",
        "category": "maintainability",
        "text": "What is your branching strategy?",
        "weight": 0.3,
        "applicable_stages": ALL_STAGES,
        "options": _options(
            "No defined strategy",
            "Basic strategy (e.g., feature branches)",
            "Advanced strategy (e.g., GitFlow)",
            "Custom strategy with automation",
        ),
    },
    # Collaboration
    {
        "id": "pr-review",
        "category": "collaboration",
        "text": "How do you handle pull request reviews?",
        "weight": 0.35,
        "applicable_stages": ALL_STAGES,
        "options": _options(
            "No formal review process",
            "Basic review process (e.g., one reviewer)",
            "Advanced review process (e.g., multiple reviewers)",
            "Automated review process with CI integration",
        ),
        "help_url": "https://docs.github.com/en/pull-requests/collaborating-with-pull-requests/reviewing-changes-in-pull-requests/about-pull-request-reviews",
    },
    {
        "id": "project-management",
        "category": "collaboration",
        "text": "Do you use GitHub Projects for sprint planning and issue tracking?",
        "tooltip_term": "GitHub Projects",
        "weight": 0.3,
        "applicable_stages": SEED_AND_LATER,
        "options": _options(
            "Not using Projects",
            "Basic usage",
            "Integrated with issues/PRs",
            "Fully embedded in workflow planning",
        ),
        "help_url": "https://docs.github.com/en/issues/planning-and-tracking-with-projects/learning-about-projects/about-projects",
    },
    {
        "id": "contribution-templates",
        "category": "collaboration",
        "text": "Do repositories provide issue and pull request templates?",
        "weight": 0.25,
        "applicable_stages": SEED_AND_LATER,
        "options": _options(
            "No templates",
            "Templates in a few repositories",
            "Issue and PR templates in active repositories",
            "Organization-wide templates with required fields",
        ),
    },
    # Velocity
    {
        "id": "pr-automation",
        "category": "velocity",
        "text": "Are pull requests automatically assigned to appropriate reviewers?",
        "tooltip_term": "auto assign",
        "weight": 0.3,
        "applicable_stages": SEED_AND_LATER,
        "options": _options(
            "No auto-assignment",
            "Basic assignment with manual overrides",
            "Mostly automated with some manual intervention",
            "Fully automated using CODEOWNERS and auto-assign actions",
        ),
    },
    {
        "id": "copilot-usage",
        "category": "velocity",
        "text": "Do developers use AI tools (like GitHub Copilot) for generating boilerplate code?",
        "tooltip_term": "GitHub Copilot",
        "weight": 0.3,
        "applicable_stages": SEED_AND_LATER,
        "options": _options(
            "No AI assistance",
            "Minimal use",
            "Moderate usage",
            "Extensive use for repetitive tasks",
        ),
        "help_url": "https://docs.github.com/en/copilot",
    },
    {
        "id": "pr-size",
        "category": "velocity",
        "text": "How large are typical pull requests?",
        "weight": 0.3,
        "applicable_stages": SERIES_A_AND_LATER,
        "options": _options(
            "Mostly over 1000 changed lines",
            "Often 500-1000 changed lines",
            "Usually under 500 changed lines",
            "Small, focused changes behind feature flags",
        ),
    },
]

BENCHMARKS = [
    {
        "stage": "pre-seed",
        "label": "Pre-Seed",
        "description": "Teams of 1-5 developers focusing on MVP development",
        "expected_scores": {
            "security": 37.5,
            "reliability": 40.0,
            "maintainability": 35.0,
            "collaboration": 40.0,
            "velocity": 30.0,
        },
        "importance": {
            "security": 0.4,
            "reliability": 0.35,
            "maintainability": 0.3,
            "collaboration": 0.3,
            "velocity": 0.25,
        },
    },
    {
        "stage": "seed",
        "label": "Seed",
        "description": "Teams of 5-15 developers scaling their infrastructure",
        "expected_scores": {
            "security": 62.5,
            "reliability": 55.0,
            "maintainability": 50.0,
            "collaboration": 55.0,
            "velocity": 45.0,
        },
        "importance": {
            "security": 0.4,
            "reliability": 0.35,
            "maintainability": 0.3,
            "collaboration": 0.35,
            "velocity": 0.3,
        },
    },
    {
        "stage": "series-a",
        "label": "Series A",
        "description": "Teams of 15+ developers optimizing for scale",
        "expected_scores": {
            "security": 75.0,
            "reliability": 70.0,
            "maintainability": 65.0,
            "collaboration": 70.0,
            "velocity": 60.0,
        },
        "importance": {
            "security": 0.45,
            "reliability": 0.4,
            "maintainability": 0.3,
            "collaboration": 0.35,
            "velocity": 0.3,
        },
    },
    {
        "stage": "series-b",
        "label": "Series B+",
        "description": "Optimize workflows and implement advanced governance",
        "expected_scores": {
            "security": 85.0,
            "reliability": 85.0,
            "maintainability": 75.0,
            "collaboration": 80.0,
            "velocity": 70.0,
        },
        "importance": {
            "security": 0.45,
            "reliability": 0.4,
            "maintainability": 0.35,
            "collaboration": 0.35,
            "velocity": 0.35,
        },
    },
]

RECOMMENDATIONS = [
    # Gap-based entries: selected whenever the category is below benchmark
    {
        "id": "security-branch-protection",
        "category": "security",
        "title": "Enable branch protection for your default branch",
        "description": "Branch protection prevents force pushes and accidental deletions, and can require status checks to pass before merging.",
        "impact": "high",
        "effort": "low",
        "automatable": True,
        "action_items": [
            "Go to your repository settings",
            "Navigate to Branches > Branch protection rules",
            "Enter your default branch name",
            "Enable \"Require pull request reviews before merging\"",
            "Enable \"Require status checks to pass before merging\"",
        ],
        "resources": [
            {
                "title": "About branch protection rules",
                "url": "https://docs.github.com/en/repositories/configuring-branches-and-merges-in-your-repository/defining-the-mergeability-of-pull-requests/about-protected-branches",
            }
        ],
    },
    {
        "id": "security-policy",
        "category": "security",
        "title": "Add a security policy to your repository",
        "description": "A security policy tells people how to report security vulnerabilities in your project.",
        "impact": "medium",
        "effort": "low",
        "automatable": True,
        "action_items": [
            "Go to your repository's Security tab",
            "Click on \"Security policy\" and \"Start setup\"",
            "Edit the SECURITY.md template to fit your project",
            "Commit the file to your repository",
        ],
        "resources": [
            {
                "title": "Adding a security policy to your repository",
                "url": "https://docs.github.com/en/code-security/getting-started/adding-a-security-policy-to-your-repository",
            }
        ],
    },
    {
        "id": "security-dependabot",
        "category": "security",
        "title": "Enable Dependabot security updates",
        "description": "Automatically creates pull requests to update vulnerable dependencies.",
        "impact": "high",
        "effort": "low",
        "automatable": True,
        "action_items": [
            "Create .github/dependabot.yml",
            "Configure package ecosystems to monitor",
            "Set update schedule and target branch",
            "Enable automatic security updates",
        ],
        "resources": [
            {
                "title": "Configuring Dependabot security updates",
                "url": "https://docs.github.com/code-security/dependabot/dependabot-security-updates/configuring-dependabot-security-updates",
            }
        ],
    },
    {
        "id": "security-code-scanning",
        "category": "security",
        "title": "Set up CodeQL analysis",
        "description": "Identifies potential security vulnerabilities and coding errors through static analysis.",
        "impact": "high",
        "effort": "medium",
        "action_items": [
            "Create .github/workflows/codeql.yml",
            "Configure languages and schedule",
            "Enable automated scanning on pull requests",
            "Set up result filtering and notifications",
        ],
        "resources": [
            {
                "title": "Configuring code scanning",
                "url": "https://docs.github.com/code-security/code-scanning/automatically-scanning-your-code-for-vulnerabilities-and-errors/configuring-code-scanning",
            }
        ],
    },
    {
        "id": "reliability-cicd",
        "category": "reliability",
        "title": "Set up CI/CD with GitHub Actions",
        "description": "Continuous Integration and Continuous Deployment help catch bugs early and automate your deployment process.",
        "impact": "high",
        "effort": "medium",
        "automatable": True,
        "action_items": [
            "Go to your repository's Actions tab",
            "Choose a workflow template that matches your project type",
            "Customize the workflow to fit your project's needs",
            "Commit the workflow file to your repository",
        ],
        "resources": [
            {"title": "GitHub Actions quickstart", "url": "https://docs.github.com/en/actions/quickstart"}
        ],
    },
    {
        "id": "reliability-workflow-success",
        "category": "reliability",
        "title": "Improve GitHub Actions workflow success rate",
        "description": "Aim for at least 80% successful workflow runs to ensure reliable builds.",
        "impact": "high",
        "effort": "medium",
        "action_items": [
            "Review recent workflow failures",
            "Fix common failure patterns",
            "Add better error handling to your workflows",
            "Consider using caching to improve reliability",
        ],
        "resources": [
            {
                "title": "Workflow syntax for GitHub Actions",
                "url": "https://docs.github.com/en/actions/using-workflows/workflow-syntax-for-github-actions",
            }
        ],
    },
    {
        "id": "maintainability-readme",
        "category": "maintainability",
        "title": "Add a README file to your repository",
        "description": "A README file helps users understand your project, how to use it, and how to contribute.",
        "impact": "high",
        "effort": "low",
        "automatable": True,
        "action_items": [
            "Create a README.md file in your repository root",
            "Include project description, installation instructions, and usage examples",
            "Add badges for build status, code coverage, and other metrics",
        ],
        "resources": [
            {
                "title": "About READMEs",
                "url": "https://docs.github.com/en/repositories/managing-your-repositorys-settings-and-features/customizing-your-repository/about-readmes",
            }
        ],
    },
    {
        "id": "maintainability-codeowners",
        "category": "maintainability",
        "title": "Add a CODEOWNERS file",
        "description": "CODEOWNERS defines who is responsible for code and automatically requests reviews from the owners.",
        "impact": "medium",
        "effort": "low",
        "automatable": True,
        "action_items": [
            "Create a .github/CODEOWNERS file",
            "Define ownership patterns for different parts of your codebase",
            "Ensure all critical code paths have owners",
        ],
        "resources": [
            {
                "title": "About code owners",
                "url": "https://docs.github.com/en/repositories/managing-your-repositorys-settings-and-features/customizing-your-repository/about-code-owners",
            }
        ],
    },
    {
        "id": "collaboration-pr-template",
        "category": "collaboration",
        "title": "Add a pull request template",
        "description": "PR templates help contributors provide all the necessary information when opening a pull request.",
        "impact": "medium",
        "effort": "low",
        "automatable": True,
        "action_items": [
            "Create a .github/PULL_REQUEST_TEMPLATE.md file",
            "Include sections for description, related issues, and testing",
            "Add a checklist for contributors to follow",
        ],
        "resources": [
            {
                "title": "Creating a pull request template",
                "url": "https://docs.github.com/en/communities/using-templates-to-encourage-useful-issues-and-pull-requests/creating-a-pull-request-template-for-your-repository",
            }
        ],
    },
    {
        "id": "collaboration-issue-template",
        "category": "collaboration",
        "title": "Add issue templates",
        "description": "Issue templates help contributors provide all the necessary information when opening an issue.",
        "impact": "medium",
        "effort": "low",
        "automatable": True,
        "action_items": [
            "Create a .github/ISSUE_TEMPLATE directory",
            "Add bug_report.md and feature_request.md",
            "Add config.yml for the template chooser",
        ],
        "resources": [
            {
                "title": "Configuring issue templates",
                "url": "https://docs.github.com/en/communities/using-templates-to-encourage-useful-issues-and-pull-requests/configuring-issue-templates-for-your-repository",
            }
        ],
    },
    {
        "id": "collaboration-review-time",
        "category": "collaboration",
        "title": "Reduce pull request review time",
        "description": "Aim for reviews within 24 hours to maintain momentum.",
        "impact": "high",
        "effort": "medium",
        "action_items": [
            "Set up notifications for new pull requests",
            "Establish a rotation for PR reviews",
            "Set clear expectations for review turnaround time",
        ],
        "resources": [
            {
                "title": "Managing code review assignment",
                "url": "https://docs.github.com/en/organizations/organizing-members-into-teams/managing-code-review-assignment-for-your-team",
            }
        ],
    },
    {
        "id": "velocity-merge-time",
        "category": "velocity",
        "title": "Reduce time to merge pull requests",
        "description": "Aim for less than 48 hours from opening to merge.",
        "impact": "high",
        "effort": "medium",
        "action_items": [
            "Encourage smaller, more focused pull requests",
            "Set up automated tests to speed up validation",
            "Use GitHub's auto-assignment feature",
        ],
        "resources": [
            {"title": "GitHub flow", "url": "https://docs.github.com/en/get-started/quickstart/github-flow"}
        ],
    },
    {
        "id": "velocity-pr-size",
        "category": "velocity",
        "title": "Reduce pull request size",
        "description": "Smaller pull requests are easier to review and merge faster.",
        "impact": "medium",
        "effort": "medium",
        "action_items": [
            "Break down large features into smaller, incremental changes",
            "Focus each PR on a single concern or feature",
            "Use feature flags for work-in-progress features",
        ],
        "resources": [
            {
                "title": "How to write the perfect pull request",
                "url": "https://github.blog/2015-01-21-how-to-write-the-perfect-pull-request/",
            }
        ],
    },
    # Stage templates: selected when the category score falls in range
    {
        "id": "pre-seed-basic-ci",
        "category": "reliability",
        "title": "Implement basic CI",
        "description": "Set up basic continuous integration with GitHub Actions.",
        "impact": "high",
        "effort": "medium",
        "stage": "pre-seed",
        "applicable_score_range": [0, 50],
        "action_items": [
            "Create a .github/workflows directory in your repository",
            "Add a CI workflow that runs on push and pull requests",
            "Configure it to build your project and run basic tests",
        ],
    },
    {
        "id": "seed-pr-checks",
        "category": "reliability",
        "title": "Implement pull request checks",
        "description": "Require CI checks to pass before pull requests can be merged.",
        "impact": "medium",
        "effort": "low",
        "stage": "seed",
        "applicable_score_range": [0, 50],
        "action_items": [
            "Configure GitHub Actions to run on pull requests",
            "Set up required checks for pull requests",
            "Enforce checks to pass before merging",
        ],
    },
    {
        "id": "seed-secret-scanning",
        "category": "security",
        "title": "Enable secret scanning",
        "description": "Prevents accidental commit of secrets and credentials to your repository.",
        "impact": "high",
        "effort": "low",
        "stage": "seed",
        "applicable_score_range": [0, 60],
        "action_items": [
            "Go to repository Settings > Security & analysis",
            "Enable secret scanning",
            "Configure push protection",
        ],
    },
    {
        "id": "seed-copilot",
        "category": "velocity",
        "title": "Adopt GitHub Copilot",
        "description": "Increases developer productivity through AI-powered code suggestions.",
        "impact": "high",
        "effort": "medium",
        "stage": "seed",
        "applicable_score_range": [0, 60],
        "action_items": [
            "Enable Copilot for the organization",
            "Install IDE extensions",
            "Train the team on effective usage",
        ],
    },
    {
        "id": "series-a-codeowners-governance",
        "category": "maintainability",
        "title": "Implement CODEOWNERS governance",
        "description": "Use CODEOWNERS for automated code review assignments across all repositories.",
        "impact": "high",
        "effort": "high",
        "stage": "series-a",
        "applicable_score_range": [0, 75],
        "action_items": [
            "Define ownership per directory for every active repository",
            "Require code owner review in branch protection",
            "Audit ownership coverage quarterly",
        ],
    },
    {
        "id": "series-a-advanced-security",
        "category": "security",
        "title": "Enable advanced security features",
        "description": "Enable secret scanning push protection and dependency review.",
        "impact": "high",
        "effort": "medium",
        "stage": "series-a",
        "applicable_score_range": [0, 75],
        "action_items": [
            "Enable GitHub Advanced Security for private repositories",
            "Add the dependency review action to pull request workflows",
            "Turn on push protection for secret scanning",
        ],
    },
    {
        "id": "series-b-enterprise-security",
        "category": "security",
        "title": "Enterprise security controls",
        "description": "Implement organization-wide security policies and default settings.",
        "impact": "high",
        "effort": "high",
        "stage": "series-b",
        "applicable_score_range": [50, 100],
        "action_items": [
            "Configure default security settings for all repositories",
            "Implement security report templates and processes",
        ],
    },
    {
        "id": "series-b-full-cicd",
        "category": "reliability",
        "title": "Full CI/CD automation",
        "description": "Implement comprehensive CI/CD pipelines with environment promotion.",
        "impact": "high",
        "effort": "high",
        "stage": "series-b",
        "applicable_score_range": [50, 100],
        "action_items": [
            "Use reusable workflows across repositories",
            "Configure deployment environments with protection rules",
            "Automate promotion from staging to production",
        ],
    },
    {
        "id": "series-b-advanced-testing",
        "category": "reliability",
        "title": "Implement advanced testing strategies",
        "description": "Add end-to-end, performance and resilience testing to CI/CD.",
        "impact": "medium",
        "effort": "high",
        "stage": "series-b",
        "applicable_score_range": [50, 100],
        "action_items": [
            "Set up end-to-end testing frameworks",
            "Implement performance testing in CI/CD",
            "Add chaos engineering practices to verify resilience",
        ],
    },
]


def build_default_catalog() -> PracticeCatalog:
    """Build the built-in practice catalog."""
    return PracticeCatalog.model_validate({
        "version": CATALOG_VERSION,
        "categories": CATEGORIES,
        "questions": QUESTIONS,
        "recommendations": RECOMMENDATIONS,
        "benchmarks": BENCHMARKS,
    })
