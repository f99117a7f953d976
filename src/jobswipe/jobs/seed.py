"""演示数据：5 家公司，每家 2 个职位，职位字段按公司序号轮换生成。"""
from jobswipe.jobs.schemas import Company, Job, new_id

SEED_COMPANIES: list[dict] = [
    {
        "company_name": "TechFlow Inc",
        "description": "Leading software development company specializing in cloud solutions and enterprise applications.",
        "website": "https://techflow.example.com",
        "location": "San Francisco, CA",
    },
    {
        "company_name": "DataVision Labs",
        "description": "AI and machine learning research company focused on computer vision and natural language processing.",
        "website": "https://datavision.example.com",
        "location": "Austin, TX",
    },
    {
        "company_name": "CloudScale Systems",
        "description": "Infrastructure and DevOps solutions provider for modern cloud architectures.",
        "website": "https://cloudscale.example.com",
        "location": "Remote",
    },
    {
        "company_name": "FinTech Solutions",
        "description": "Innovative financial technology company building next-gen payment systems.",
        "website": "https://fintech.example.com",
        "location": "New York, NY",
    },
    {
        "company_name": "HealthTech Innovations",
        "description": "Healthcare technology company revolutionizing patient care through digital solutions.",
        "website": "https://healthtech.example.com",
        "location": "Boston, MA",
    },
]


def seed_jobs_for(company: Company, index: int) -> list[Job]:
    """第 index 家公司的两个职位。"""
    return [
        Job(
            company_id=company.id,
            title=f"Senior {['Full Stack', 'Frontend', 'Backend'][index % 3]} Developer",
            description=(
                "We are looking for an experienced developer to join our team. "
                "You will work on cutting-edge projects and collaborate with talented engineers."
            ),
            skills_required=["React", "TypeScript", "Node.js", "PostgreSQL"],
            experience_required=5 + (index % 3),
            location=company.location,
            job_type=["remote", "hybrid", "onsite"][index % 3],
            salary_range=f"${100 + index * 20}k - ${150 + index * 25}k",
        ),
        Job(
            company_id=company.id,
            title=(
                f"{['Junior', 'Mid-Level', 'Senior'][index % 3]} "
                f"{['UI/UX', 'DevOps', 'Data'][index % 3]} Engineer"
            ),
            description=(
                "Join our dynamic team and help build innovative solutions. "
                "Great opportunity for growth and learning."
            ),
            skills_required=["JavaScript", "Python", "Docker", "AWS"],
            experience_required=index % 5,
            location=company.location,
            job_type=["onsite", "remote", "hybrid"][index % 3],
            salary_range=f"${80 + index * 15}k - ${120 + index * 20}k",
        ),
    ]


def build_seed_data() -> tuple[list[Company], list[Job]]:
    """生成一批新的演示公司与职位（每次调用 id 都不同）。"""
    companies = [Company(id=new_id(), **data) for data in SEED_COMPANIES]
    jobs: list[Job] = []
    for index, company in enumerate(companies):
        jobs.extend(seed_jobs_for(company, index))
    return companies, jobs
